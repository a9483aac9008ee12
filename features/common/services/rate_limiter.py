import asyncio

class RequestThrottle:
    """Fixed-interval throttle for sequential upstream requests.

    One instance belongs to a single pipeline invocation; it is not shared,
    so concurrent invocations never wait on each other.
    """

    def __init__(self, interval: float = 0.1):
        """Initialize throttle.

        Args:
            interval: Seconds to wait between consecutive requests
        """
        self.interval = interval
        self._request_count = 0

    @property
    def request_count(self) -> int:
        return self._request_count

    async def limit(self):
        """Wait before a request unless it is the first one."""
        if self._request_count > 0 and self.interval > 0:
            await asyncio.sleep(self.interval)

        self._request_count += 1
