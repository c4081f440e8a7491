"""Demonstrates lazy discovery of parameter combinations.

Run with:
    paramplan run examples/plan_example_storage.py -vv
"""

import paramplan


class FakeStore:
    def __init__(self, backend: str, compression: str | None = None) -> None:
        self.backend = backend
        self.compression = compression
        self.data: dict[str, bytes] = {}

    def put(self, key: str, value: bytes) -> None:
        self.data[key] = value

    def get(self, key: str) -> bytes:
        return self.data[key]


@paramplan.tag("storage", "smoke")
def plan_storage_roundtrip(t: paramplan.Planner) -> None:
    """Runs once per backend, and once per compression codec where it applies."""
    backend = t.select("backend", "memory", "sqlite", "postgres")
    t.logger.info("using backend %s", backend)

    if backend == "memory":
        store = FakeStore(backend)
    else:
        # only disk-backed stores offer compression, so only they discover it
        def with_compression(t2: paramplan.Planner) -> None:
            codec = t2.select("compression", "none", "zstd")
            store = FakeStore(t2.parameter("backend"), codec)
            t2.run("roundtrip", lambda e: check_roundtrip(e, store))

        t.plan("compressed", with_compression)
        return

    t.run("roundtrip", lambda e: check_roundtrip(e, store))


def check_roundtrip(t: paramplan.Executor, store: FakeStore) -> None:
    store.put("k", b"v")
    assert store.get("k") == b"v"


def plan_backend_specific_limits(t: paramplan.Planner) -> None:
    """A wildcard accepts whatever backend an enclosing plan picked."""
    backend = t.select("backend", "sqlite", "postgres")

    def limits(e: paramplan.Executor) -> None:
        bound = e.select("backend", paramplan.WILDCARD)
        assert bound == backend

    t.run("limits", limits)


@paramplan.tag.skip(reason="cluster backend not available in CI")
def plan_cluster(t: paramplan.Planner) -> None:
    t.select("nodes", "3", "5")
    raise RuntimeError("Should never execute")
