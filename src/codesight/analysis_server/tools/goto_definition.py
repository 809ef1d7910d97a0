"""Jump to the source definition of a symbol, or report its metadata origin."""

import logging

from ..models.response_models import DefinitionResponse
from ..semantic.workspace import WorkspaceHost
from ._common import begin_request, symbol_info, target_descriptor
from .symbol_resolver import require_resolved

logger = logging.getLogger(__name__)


def goto_definition_impl(
    fully_qualified_name: str | None = None,
    file: str | None = None,
    line: int | None = None,
    column: int | None = None,
    host: WorkspaceHost | None = None,
) -> DefinitionResponse:
    descriptor = target_descriptor(fully_qualified_name, file, line, column)
    context = begin_request(host=host)

    symbol = require_resolved(context.resolver.resolve(descriptor), descriptor)
    source = context.snapshot.find_source_definition(symbol)
    definition = source or symbol
    if source is None:
        logger.debug(f"No source definition for {symbol.display}")

    return DefinitionResponse(
        symbol=symbol_info(symbol),
        definition=symbol_info(definition),
        is_source_definition=source is not None,
        is_from_metadata=source is None and not definition.in_source,
    )
