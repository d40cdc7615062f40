"""
Async Helpers
Runs blocking web3 calls off the event loop
"""

import asyncio
import functools
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, TypeVar
from loguru import logger

T = TypeVar('T')

# Deploy steps are strictly sequential, one RPC call in flight at a time
_rpc_executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="deploy_rpc")


async def run_sync(func: Callable[..., T], *args, **kwargs) -> T:
    """
    Await a blocking call (web3 RPC, file IO) on the RPC worker thread.

    Args:
        func: Blocking callable
        *args, **kwargs: Passed through to func

    Returns:
        Whatever func returns; its exceptions propagate to the awaiting coroutine
    """
    logger.trace(f"RPC call: {getattr(func, '__name__', repr(func))}")

    call = functools.partial(func, *args, **kwargs)
    return await asyncio.get_running_loop().run_in_executor(_rpc_executor, call)
