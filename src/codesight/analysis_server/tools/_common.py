"""
Shared plumbing for tool implementations: request setup, symbol presentation
and conversion of outcomes into structured responses.
"""

import logging
from collections.abc import Callable, Iterable
from dataclasses import asdict, dataclass
from typing import Any

from ...utils.pagination import Page, paginate, resolve_page_number
from ..cancellation import CancellationToken
from ..config import AnalysisServerConfig, get_config
from ..errors import AmbiguousSymbolError, AnalysisToolError, ErrorCode, describe_exception
from ..models.response_models import AnalysisError, LocationInfo, ParameterInfo, SymbolInfo
from ..models.symbol_models import Location, SymbolRef, TargetDescriptor
from ..semantic.snapshot import WorkspaceSnapshot
from ..semantic.workspace import WorkspaceHost, get_workspace_host
from .symbol_resolver import SymbolResolver

logger = logging.getLogger(__name__)


@dataclass
class RequestContext:
    """Everything one tool invocation works with, captured once at start."""

    snapshot: WorkspaceSnapshot
    config: AnalysisServerConfig
    token: CancellationToken

    @property
    def resolver(self) -> SymbolResolver:
        return SymbolResolver(self.snapshot)

    def page(self, items: list, page: int | None, page_size: int | None, cursor: str | None) -> Page:
        size = self.config.clamp_page_size(page_size)
        number = resolve_page_number(page, cursor, size)
        return paginate(items, page=number, page_size=size, max_page_size=self.config.max_page_size)


def begin_request(timeout_ms: int | None = None, host: WorkspaceHost | None = None) -> RequestContext:
    """Capture the active snapshot and start the request deadline."""
    config = get_config()
    snapshot = (host or get_workspace_host()).require_snapshot()
    token = CancellationToken(config.clamp_timeout(timeout_ms))
    return RequestContext(snapshot=snapshot, config=config, token=token)


def target_descriptor(
    fully_qualified_name: str | None,
    file: str | None,
    line: int | None,
    column: int | None,
) -> TargetDescriptor:
    return TargetDescriptor.from_arguments(fully_qualified_name=fully_qualified_name, file=file, line=line, column=column)


# Presentation


def location_info(location: Location) -> LocationInfo:
    return LocationInfo(file=location.file, line=location.line, column=location.column)


def symbol_info(symbol: SymbolRef) -> SymbolInfo:
    info = SymbolInfo(
        display=symbol.display,
        name=symbol.name,
        kind=symbol.kind.value,
        containing_type=symbol.containing_type,
        containing_namespace=symbol.containing_namespace,
        type_kind=symbol.type_kind.value if symbol.type_kind else None,
        method_kind=symbol.method_kind.value if symbol.method_kind else None,
        member_type=symbol.member_type,
        accessibility=symbol.accessibility,
        is_static=symbol.is_static,
        is_abstract=symbol.is_abstract,
        is_virtual=symbol.is_virtual,
        is_override=symbol.is_override,
    )
    if symbol.location is not None:
        info.file = symbol.location.file
        info.line = symbol.location.line
        info.column = symbol.location.column
    if symbol.method_kind is not None:
        info.parameters = [ParameterInfo(name=p.name, type=p.type, ref_kind=p.ref_kind.value) for p in symbol.parameters]
    return info


def symbol_infos(symbols: Iterable[SymbolRef]) -> list[SymbolInfo]:
    """Present symbols ordered by display string."""
    return [symbol_info(s) for s in sorted(symbols, key=lambda s: s.display)]


def page_fields(page: Page) -> dict[str, Any]:
    return {
        "total": page.total,
        "page": page.page,
        "page_size": page.page_size,
        "next_cursor": page.next_cursor,
        "has_more": page.has_more,
    }


# Outcomes


def _without_none(data: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in data.items() if value is not None}


def error_response(error: AnalysisError) -> dict[str, Any]:
    return {"success": False, "error": _without_none(asdict(error))}


def error_from_exception(exc: Exception) -> AnalysisError:
    if isinstance(exc, AmbiguousSymbolError):
        return AnalysisError(
            code=exc.code.value,
            message=exc.message,
            candidates=[symbol_info(c) for c in exc.candidates],
            hint=exc.hint,
        )
    if isinstance(exc, AnalysisToolError):
        return AnalysisError(code=exc.code.value, message=exc.message, details=exc.details or None)
    return AnalysisError(
        code=ErrorCode.INTERNAL.value,
        message=f"Unhandled exception: {exc}",
        details=describe_exception(exc),
    )


def run_tool(tool_name: str, impl: Callable[..., Any], **kwargs: Any) -> dict[str, Any]:
    """
    Run a tool implementation and convert any outcome to a structured dict.

    Returns:
        ``{"success": True, ...payload}`` or ``{"success": False, "error": {...}}``
    """
    try:
        payload = impl(**kwargs)
    except AnalysisToolError as e:
        logger.info(f"{tool_name} failed with {e.code.value}: {e.message}")
        return error_response(error_from_exception(e))
    except Exception as e:
        logger.exception(f"Unhandled exception in {tool_name}")
        return error_response(error_from_exception(e))
    return {"success": True, **asdict(payload)}
