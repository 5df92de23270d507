"""Host runtime built-in modules."""

from __future__ import annotations

NODE_PREFIX = "node:"

NODE_BUILTINS: frozenset[str] = frozenset(
    {
        "_http_agent",
        "_http_client",
        "_http_common",
        "_http_incoming",
        "_http_outgoing",
        "_http_server",
        "_stream_duplex",
        "_stream_passthrough",
        "_stream_readable",
        "_stream_transform",
        "_stream_wrap",
        "_stream_writable",
        "_tls_common",
        "_tls_wrap",
        "assert",
        "assert/strict",
        "async_hooks",
        "buffer",
        "child_process",
        "cluster",
        "console",
        "constants",
        "crypto",
        "dgram",
        "diagnostics_channel",
        "dns",
        "dns/promises",
        "domain",
        "events",
        "fs",
        "fs/promises",
        "http",
        "http2",
        "https",
        "inspector",
        "inspector/promises",
        "module",
        "net",
        "os",
        "path",
        "path/posix",
        "path/win32",
        "perf_hooks",
        "process",
        "punycode",
        "querystring",
        "readline",
        "readline/promises",
        "repl",
        "stream",
        "stream/consumers",
        "stream/promises",
        "stream/web",
        "string_decoder",
        "sys",
        "timers",
        "timers/promises",
        "tls",
        "trace_events",
        "tty",
        "url",
        "util",
        "util/types",
        "v8",
        "vm",
        "wasi",
        "worker_threads",
        "zlib",
    }
)

# Only reachable with the node: prefix
_PREFIX_ONLY: frozenset[str] = frozenset({"sea", "sqlite", "test", "test/reporters"})


def is_builtin(specifier: str) -> bool:
    """Check whether specifier names a built-in module of the host runtime.

    Example:
        >>> is_builtin("fs"), is_builtin("node:fs/promises"), is_builtin("lodash")
        (True, True, False)
    """
    if specifier.startswith(NODE_PREFIX):
        name = specifier[len(NODE_PREFIX) :]
        return name in NODE_BUILTINS or name in _PREFIX_ONLY
    return specifier in NODE_BUILTINS
