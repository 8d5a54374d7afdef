import asyncio
import logging
import random
import time

from batch_executor.domain.batch_options import BatchOptions
from batch_executor.infrastructure.batch_executor import BatchExecutor


async def simulated_request(request_id: int, delay: float, fail: bool = False) -> dict[str, int]:
    """Pretend to call a remote service."""
    await asyncio.sleep(delay)
    if fail:
        raise ConnectionError(f"request {request_id} was refused")
    return {"request_id": request_id, "status": 200}


async def main() -> None:
    """Compare a bounded batch against the serial and unbounded cases."""
    print("=" * 80)
    print("BOUNDED BATCH EXECUTION")
    print("=" * 80)

    delay = 0.1
    tasks = [lambda i=i: simulated_request(i, delay) for i in range(10)]

    for concurrency in (1, 3, 10):
        executor = BatchExecutor(BatchOptions(max_concurrency=concurrency))
        start = time.monotonic()
        results = await executor.execute(tasks)
        elapsed = time.monotonic() - start
        print(f"  max_concurrency={concurrency:>2}: {len(results)} results in {elapsed:.2f}s")


async def main_with_errors() -> None:
    """Keep going past failures and timeouts by routing them to a handler."""
    print("=" * 80)
    print("PARTIAL FAILURE HANDLING")
    print("=" * 80)

    failures: list[tuple[int, str]] = []

    def on_error(error: BaseException, index: int) -> None:
        failures.append((index, type(error).__name__))

    tasks = [
        lambda i=i: simulated_request(i, random.uniform(0.01, 0.08), fail=(i % 4 == 2))
        for i in range(8)
    ]
    # One request hangs well past the deadline
    tasks.append(lambda: simulated_request(8, 5.0))

    executor = BatchExecutor(BatchOptions(max_concurrency=3, max_timeout=200, on_error=on_error))
    result = await executor.execute_detailed(tasks)

    for outcome in result.outcomes:
        print(f"  [{outcome.status.name:<7}] task {outcome.index}: {outcome.value}")
    print(f"\n  Handler saw: {failures}")
    print(f"  Succeeded: {len(result.succeeded)}, failed: {len(result.failed)}")


if __name__ == "__main__":
    import sys

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    if len(sys.argv) > 1 and sys.argv[1] == "--errors":
        logging.info("Running partial failure demo...")
        asyncio.run(main_with_errors())
    else:
        logging.info("Running concurrency comparison demo...")
        logging.info("(Use --errors flag for the failure handling demo)")
        asyncio.run(main())

    logging.info("Demo finished.")
