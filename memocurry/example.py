import argparse
import logging
from typing import Callable, Iterable

from memocurry.comfies.config import List, boolean, path
from memocurry.comfies.curry import add
from memocurry.comfies.memoize import (
    KEY_POLICIES,
    get_key_policy,
    join_key,
    memoize,
)
from memocurry.utils import create_logger, load_config


logger = logging.getLogger(__name__)


def get_offset_number() -> int:
    """Simulate an expensive computation of the offset.

    Returns:
        int: The offset, always 42.
    """
    logger.info("Calculating offset... (Expensive operation)")
    return 42


def build_memoized_adder(
    offset: int | None = None,
    key: Callable = join_key,
    log: logging.Logger | None = None,
    thread_safe: bool = False,
) -> Callable:
    """Memoize the curried adder with a fixed offset.

    Args:
        offset (int | None, optional): First operand of the adder. Defaults to
            None, in which case it is computed with get_offset_number().
        key (Callable, optional): Cache key policy. Defaults to join_key.
        log (logging.Logger | None, optional): Logger for cache narration.
        thread_safe (bool, optional): Guard the cache with a lock.

    Returns:
        Callable: memoized one-argument adder.
    """
    if offset is None:
        offset = get_offset_number()
    return memoize(add(offset), key=key, logger=log, thread_safe=thread_safe)


def run_example(
    values: Iterable[int] = (4, 6, 4),
    offset: int | None = None,
    key: Callable = join_key,
    log: logging.Logger | None = None,
    thread_safe: bool = False,
) -> list:
    """Apply one memoized adder to every value.

    Args:
        values (Iterable[int], optional): Second operands. Defaults to
            (4, 6, 4).
        offset (int | None, optional): See build_memoized_adder().
        key (Callable, optional): Cache key policy. Defaults to join_key.
        log (logging.Logger | None, optional): Logger for cache narration.
        thread_safe (bool, optional): Guard the cache with a lock.

    Returns:
        list: One result per value.
    """
    memoized_add_offset = build_memoized_adder(
        offset, key=key, log=log, thread_safe=thread_safe
    )
    return [memoized_add_offset(value) for value in values]


def main(
    config_path: str | None = None,
    values: list[int] | None = None,
    log_level: str | None = None,
) -> list:
    """Run the memoization example.

    Args:
        config_path (str | None, optional): Path to the YAML configuration
            file.
        values (list[int] | None, optional): Values to add to the offset;
            these override the values from the config file.
        log_level (str | None, optional): Logging level; overrides the level
            from the config file.

    Returns:
        list: The results, also printed one per line.
    """
    config = load_config(config_path)

    if log_level:
        config.set("logging.level", log_level)
    level = config.get(
        "logging.level", "INFO", type=lambda s: str(s).upper(),
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    )
    log_file = config.get("logging.file", None, type=path)
    # Narration from every module of the package goes to the same handler
    log = create_logger("memocurry", level, log_file)

    if values is None:
        values = config.get("example.values", type=List(int))
    offset = config.get("example.offset", None, type=int)
    key = get_key_policy(
        config.get("memoize.key", "join", choices=KEY_POLICIES)
    )
    thread_safe = config.get("memoize.thread_safe", False, type=boolean)

    log.info(f"Running example with values {values}")
    results = run_example(values, offset, key=key, thread_safe=thread_safe)

    for result in results:
        print(result)

    return results


if __name__ == "__main__":  # pragma: no cover
    parser = argparse.ArgumentParser(
        description="Memoize a curried adder and call it repeatedly."
    )
    parser.add_argument(
        "--config", "-c", required=False, help="Path to the configuration file."
    )
    parser.add_argument(
        "--values",
        "-v",
        nargs="+",
        type=int,
        required=False,
        help="Values to add to the offset; override the config file.",
    )
    parser.add_argument(
        "--log-level",
        "-l",
        required=False,
        help="Logging level, e.g. DEBUG to see the arguments of each call.",
    )

    args = parser.parse_args()

    main(args.config, args.values, args.log_level)
