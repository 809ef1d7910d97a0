"""
Find every reference to a symbol across the loaded workspace.

Locations are ordered by file, line and column and carry the trimmed source
line as context.
"""

from ..models.response_models import FindReferencesResponse, ReferenceInfo
from ..semantic.workspace import WorkspaceHost
from ._common import begin_request, page_fields, symbol_info, target_descriptor
from .symbol_resolver import require_resolved

# References are converted in batches with a deadline check between them
REFERENCE_BATCH_SIZE = 500


def find_references_impl(
    fully_qualified_name: str | None = None,
    file: str | None = None,
    line: int | None = None,
    column: int | None = None,
    page: int | None = 1,
    page_size: int | None = None,
    cursor: str | None = None,
    timeout_ms: int | None = None,
    host: WorkspaceHost | None = None,
) -> FindReferencesResponse:
    """
    Find all references to a symbol.

    Args:
        fully_qualified_name: Qualified name of the symbol
        file: Source file of a position inside the symbol or a reference to it
        line: 1-based line of that position
        column: 1-based column of that position
        page: Page number for pagination
        page_size: References per page
        cursor: Continuation token from a previous page (overrides page)
        timeout_ms: Time budget for the request

    Returns:
        FindReferencesResponse with one page of references
    """
    descriptor = target_descriptor(fully_qualified_name, file, line, column)
    context = begin_request(timeout_ms, host=host)

    symbol = require_resolved(context.resolver.resolve(descriptor), descriptor)
    context.token.check()
    locations = context.snapshot.find_references(symbol)

    references = []
    for start in range(0, len(locations), REFERENCE_BATCH_SIZE):
        context.token.check()
        for ref in locations[start : start + REFERENCE_BATCH_SIZE]:
            references.append(
                ReferenceInfo(file=ref.location.file, line=ref.location.line, column=ref.location.column, text=ref.text)
            )

    result_page = context.page(references, page, page_size, cursor)
    return FindReferencesResponse(symbol=symbol_info(symbol), references=result_page.items, **page_fields(result_page))
