"""ssrexternal - decide which dependencies a server-rendering bundle externalizes."""

__version__ = "0.1.0"

from ssrexternal.domain.model.config import BuildConfig, NoExternal, SsrConfig, SsrTarget
from ssrexternal.presentation.api.ssr_externals import SsrExternals

__all__ = [
    "BuildConfig",
    "NoExternal",
    "SsrConfig",
    "SsrExternals",
    "SsrTarget",
    "__version__",
]
