"""Tests for jsppages.attributes — typed context attribute access."""

import threading

import pytest

from jsppages.attributes import ContextAttribute
from jsppages.container import LocalContext
from jsppages.errors import AttributeTypeError, ConfigurationError


@pytest.fixture
def context(tmp_path) -> LocalContext:
    return LocalContext(tmp_path)


class Counter:
    def __init__(self) -> None:
        self.value = 0


class TestGet:
    def test_empty_slot(self, context) -> None:
        attr = ContextAttribute("test.counter", Counter)
        assert attr.get(context) is None

    def test_typed_value(self, context) -> None:
        attr = ContextAttribute("test.counter", Counter)
        counter = Counter()
        attr.set(context, counter)
        assert attr.get(context) is counter

    def test_wrong_type_raises(self, context) -> None:
        context.set_attribute("test.counter", "not a counter")
        attr = ContextAttribute("test.counter", Counter)
        with pytest.raises(AttributeTypeError, match="expected Counter"):
            attr.get(context)

    def test_remove(self, context) -> None:
        attr = ContextAttribute("test.counter", Counter)
        attr.set(context, Counter())
        attr.remove(context)
        assert attr.get(context) is None


class TestGetOrCreate:
    def test_creates_once(self, context) -> None:
        calls: list[LocalContext] = []

        def factory(ctx):
            calls.append(ctx)
            return Counter()

        attr = ContextAttribute("test.counter", Counter, factory=factory)
        first = attr.get_or_create(context)
        second = attr.get_or_create(context)

        assert first is second
        assert calls == [context]

    def test_without_factory_raises(self, context) -> None:
        attr = ContextAttribute("test.counter", Counter)
        with pytest.raises(ConfigurationError, match="no factory"):
            attr.get_or_create(context)

    def test_separate_contexts(self, tmp_path) -> None:
        attr = ContextAttribute("test.counter", Counter, factory=lambda ctx: Counter())
        a = LocalContext(tmp_path)
        b = LocalContext(tmp_path)
        assert attr.get_or_create(a) is not attr.get_or_create(b)

    def test_concurrent_first_access(self, context) -> None:
        attr = ContextAttribute("test.counter", Counter, factory=lambda ctx: Counter())
        barrier = threading.Barrier(8)
        results: list[Counter] = []
        lock = threading.Lock()

        def worker() -> None:
            barrier.wait()
            value = attr.get_or_create(context)
            with lock:
                results.append(value)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(results) == 8
        assert all(r is results[0] for r in results)
        assert attr.get(context) is results[0]


def test_repr() -> None:
    attr = ContextAttribute("test.counter", Counter)
    assert repr(attr) == "ContextAttribute('test.counter', Counter)"
