"""
Post-process hooks for finished JSON-LD documents.

Subscribers receive each top-level document after assembly and before it is
returned, and may change it in place (e.g. add ``url`` or ``@id``).
"""
import inspect
from typing import Any, Awaitable, Callable, List, Optional, Union

from app.config import config
from app.errors import HookError
from app.models.schema import SchemaBase
from app.utils.logger import LayerLogger

DocumentHook = Callable[[SchemaBase], Union[None, Awaitable[None]]]


class DocumentHooks:
    """Ordered registry of document subscribers."""
    
    def __init__(self, isolate_failures: Optional[bool] = None):
        self.logger = LayerLogger("document_hooks")
        self._hooks: List[DocumentHook] = []
        self.isolate_failures = (
            config.is_hook_isolation_enabled() if isolate_failures is None else isolate_failures
        )
    
    def register(self, hook: DocumentHook) -> DocumentHook:
        """Register a subscriber. Usable as a decorator."""
        self._hooks.append(hook)
        return hook
    
    def unregister(self, hook: DocumentHook):
        self._hooks.remove(hook)
    
    def __len__(self) -> int:
        return len(self._hooks)
    
    async def notify(self, document: SchemaBase) -> None:
        """
        Run every subscriber, in registration order, to completion.
        
        A failing subscriber raises HookError unless failures are isolated,
        in which case it is logged and the remaining subscribers still run.
        """
        for hook in self._hooks:
            name = getattr(hook, "__qualname__", repr(hook))
            try:
                result: Any = hook(document)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                self.logger.log_error(
                    str(e),
                    error_type="hook_failure",
                    hook=name,
                    document_type=getattr(document, "type", None),
                    isolated=self.isolate_failures,
                )
                if not self.isolate_failures:
                    raise HookError(f"Post-process hook {name} failed: {e}", hook_name=name) from e
