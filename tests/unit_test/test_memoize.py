import logging
import threading
import time
import pytest
from memocurry.comfies.memoize import (
    memoize,
    join_key,
    repr_key,
    tuple_key,
    get_key_policy,
    KEY_POLICIES,
)


def test_memoize_calls_underlying_once(mocker):
    fn = mocker.Mock(return_value=10)
    memoized = memoize(fn)

    assert memoized(3) == 10
    assert memoized(3) == 10
    fn.assert_called_once_with(3)


def test_memoize_returns_identical_result():
    memoized = memoize(lambda x: [x])

    first = memoized(1)
    assert memoized(1) is first


def test_memoize_discriminates_keys(mocker):
    fn = mocker.Mock(side_effect=lambda x: x * 2)
    memoized = memoize(fn)

    assert memoized(2) == 4
    assert memoized(5) == 10
    assert fn.call_count == 2
    assert memoized.cache == {"2": 4, "5": 10}


def test_memoize_does_not_cache_failures(mocker):
    fn = mocker.Mock(side_effect=[ValueError("boom"), 7])
    memoized = memoize(fn)

    with pytest.raises(ValueError, match="boom"):
        memoized(1)
    assert "1" not in memoized.cache

    # Second call retries the computation
    assert memoized(1) == 7
    assert memoized(1) == 7
    assert fn.call_count == 2


def test_memoize_caches_are_private():
    calls = []

    def square(x):
        calls.append(x)
        return x * x

    first = memoize(square)
    second = memoize(square)
    first(3)
    second(3)

    assert calls == [3, 3]
    assert first.cache is not second.cache


def test_memoize_keyword_arguments(mocker):
    fn = mocker.Mock(side_effect=lambda a, b=0: a + b)
    memoized = memoize(fn)

    assert memoized(1, b=2) == 3
    assert memoized(1, b=2) == 3
    assert memoized(1) == 1
    assert fn.call_count == 2


def test_memoize_as_decorator():
    calls = []

    @memoize
    def double(x):
        """Double x."""
        calls.append(x)
        return 2 * x

    @memoize(key=tuple_key)
    def triple(x):
        calls.append(x)
        return 3 * x

    assert double(2) == double(2) == 4
    assert triple(2) == triple(2) == 6
    assert calls == [2, 2]
    assert double.__name__ == "double"
    assert double.__doc__ == "Double x."
    assert triple.key is tuple_key


def test_memoize_rejects_non_callable_key():
    with pytest.raises(TypeError):
        memoize(lambda x: x, key="join")


def test_tuple_key_distinguishes_equal_values_of_other_types(mocker):
    fn = mocker.Mock(side_effect=lambda x: type(x).__name__)
    memoized = memoize(fn, key=tuple_key)

    # 1, True and 1.0 compare and hash equal but are cached apart
    assert memoized(1) == "int"
    assert memoized(True) == "bool"
    assert memoized(1.0) == "float"
    assert memoized(x=1) == "int"
    assert memoized(x=True) == "bool"
    assert fn.call_count == 5


def test_join_key_collides_string_and_number(mocker):
    fn = mocker.Mock(side_effect=lambda x: x)
    memoized = memoize(fn, key=join_key)

    assert memoized(4) == 4
    # "4" stringifies like 4, so the cached number comes back
    assert memoized("4") == 4
    fn.assert_called_once_with(4)


@pytest.mark.parametrize("key", [repr_key, tuple_key])
def test_strict_keys_distinguish_string_and_number(mocker, key):
    fn = mocker.Mock(side_effect=lambda x: x)
    memoized = memoize(fn, key=key)

    assert memoized(4) == 4
    assert memoized("4") == "4"
    assert fn.call_count == 2


@pytest.mark.parametrize("args,kwargs,expected", [
    ((4,), {}, "4"),
    ((4, 6), {}, "4-6"),
    ((None, 1), {}, "-1"),
    ((), {}, ""),
    ((1,), {"b": 2, "a": "x"}, "1-a=x-b=2"),
])
def test_join_key(args, kwargs, expected):
    assert join_key(args, kwargs) == expected


def test_repr_key():
    assert repr_key(("4", 4), {}) == "'4'-4"


def test_tuple_key_unhashable_argument(mocker):
    fn = mocker.Mock()
    memoized = memoize(fn, key=tuple_key)

    with pytest.raises(TypeError):
        memoized([1, 2])
    fn.assert_not_called()
    assert memoized.cache == {}


def test_get_key_policy():
    for name, policy in KEY_POLICIES.items():
        assert get_key_policy(name) is policy

    with pytest.raises(ValueError, match="unknown key policy"):
        get_key_policy("md5")


def test_memoize_logging(caplog):
    caplog.set_level(logging.DEBUG, logger="memocurry")
    memoized = memoize(lambda a, b: a + b)

    memoized(1, 2)
    memoized(1, 2)

    messages = [r.getMessage() for r in caplog.records]
    assert "Args: 1, 2" in messages
    assert "Calculating result for key: 1-2..." in messages
    assert "Result calculated for key: 1-2 - Caching. Result: 3" in messages
    assert "Memoized - Returning cached result for key: 1-2" in messages


def test_memoize_custom_logger(mocker):
    log = mocker.Mock()
    memoized = memoize(lambda x: x, logger=log)

    memoized(1)
    memoized(1)

    log.info.assert_any_call(
        "Memoized - Returning cached result for key: %s", "1"
    )


def test_memoize_thread_safe_computes_once():
    calls = []

    def slow(x):
        calls.append(x)
        time.sleep(0.05)
        return x + 1

    memoized = memoize(slow, thread_safe=True)
    results = []
    threads = [
        threading.Thread(target=lambda: results.append(memoized(1)))
        for _ in range(8)
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert results == [2] * 8
    assert calls == [1]


def test_memoize_thread_safe_recursive_calls():
    calls = []

    @memoize(thread_safe=True)
    def fib(n):
        calls.append(n)
        return n if n < 2 else fib(n - 1) + fib(n - 2)

    results = []
    worker = threading.Thread(target=lambda: results.append(fib(10)),
                              daemon=True)
    worker.start()
    worker.join(5)

    assert not worker.is_alive()
    assert results == [55]
    assert sorted(calls) == list(range(11))
