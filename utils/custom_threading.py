"""
Script contains functions for threading
"""

from concurrent import futures
from utils.logger import logger


class ThreadExecutor:
    """
    Class to run independent scrape lanes side by side
    """
    def __init__(self, max_workers=None):
        self.executor = futures.ThreadPoolExecutor(max_workers=max_workers)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.shutdown()

    def shutdown(self):
        self.executor.shutdown(wait=True)

    def wait_on_futures(self, futures_iter):
        logger.info("ThreadExecutor: Waiting on futures")
        futures.wait(futures_iter)
        logger.info("ThreadExecutor: done waiting")

    def submit(self, fn, *args, **kwargs):
        return self.executor.submit(fn, *args, **kwargs)
