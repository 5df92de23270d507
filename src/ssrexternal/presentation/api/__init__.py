"""Public API for SSR externalization."""

from ssrexternal.presentation.api.ssr_externals import SsrExternals

__all__ = ["SsrExternals"]
