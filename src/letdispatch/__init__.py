from .core import (
    OverloadBase,
    PendingOverload,
    declare,
    display_methods,
    is_overloaded,
    let,
    let_in,
)
from .dispatch import (
    Dispatcher,
    ancestor_chain,
    default_dispatcher,
    display_resolution,
)
from .registry import (
    OverloadRecord,
    Registry,
    has_registry,
    provision,
    registry_of,
)
from .signatures import (
    TypeSignature,
    compatible,
    normalize_marker,
)
from .utils import (
    MISSING,
    THIS,
    Any,
    Named,
    OverloadNotImplemented,
    ResolutionError,
    UsageError,
)
from .version import version as __version__

__all__ = [
    "OverloadBase",
    "PendingOverload",
    "declare",
    "display_methods",
    "is_overloaded",
    "let",
    "let_in",
    "Dispatcher",
    "ancestor_chain",
    "default_dispatcher",
    "display_resolution",
    "OverloadRecord",
    "Registry",
    "has_registry",
    "provision",
    "registry_of",
    "TypeSignature",
    "compatible",
    "normalize_marker",
    "MISSING",
    "THIS",
    "Any",
    "Named",
    "OverloadNotImplemented",
    "ResolutionError",
    "UsageError",
    "__version__",
]
