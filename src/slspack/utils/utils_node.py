# src/slspack/utils/utils_node.py
"""Knowledge about the Node.js runtime the bundles run on."""

# Core modules shipped with Node.js; never installed as dependencies.
NODE_BUILTIN_MODULES: frozenset[str] = frozenset(
    {
        "assert",
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
        "domain",
        "events",
        "fs",
        "http",
        "http2",
        "https",
        "inspector",
        "module",
        "net",
        "os",
        "path",
        "perf_hooks",
        "process",
        "punycode",
        "querystring",
        "readline",
        "repl",
        "stream",
        "string_decoder",
        "sys",
        "timers",
        "tls",
        "trace_events",
        "tty",
        "url",
        "util",
        "v8",
        "vm",
        "wasi",
        "worker_threads",
        "zlib",
    }
)

# only importable with the 'node:' scheme
NODE_PREFIX_ONLY_MODULES: frozenset[str] = frozenset({"sea", "sqlite", "test"})


def is_builtin_module(name: str) -> bool:
    """True for 'fs', 'fs/promises', 'node:fs' and friends."""
    if name.startswith("node:"):
        base = name[len("node:") :].split("/", 1)[0]
        return base in NODE_BUILTIN_MODULES or base in NODE_PREFIX_ONLY_MODULES
    return name.split("/", 1)[0] in NODE_BUILTIN_MODULES
