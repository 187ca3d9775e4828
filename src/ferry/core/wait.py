"""Bounded polling for operations that need a moment to become true."""

from collections.abc import Callable

from ferry.core.time.abc import Time


def wait_until(
    probe: Callable[[], bool],
    *,
    time: Time,
    timeout: float,
    interval: float,
) -> bool:
    """Call probe until it succeeds or the wall-clock budget runs out.

    The probe always runs at least once. Between failed attempts the caller's
    Time sleeps for `interval` seconds. No attempt starts once `timeout`
    seconds have elapsed since the first one.

    Args:
        probe: Callable returning True on success
        time: Time implementation (fake in tests)
        timeout: Total budget in seconds
        interval: Pause between attempts in seconds

    Returns:
        The last result observed from probe
    """
    started = time.monotonic()
    result = probe()
    while not result and time.monotonic() - started < timeout:
        time.sleep(interval)
        result = probe()
    return result
