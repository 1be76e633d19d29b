"""Console logging and small numeric helpers shared by the generators"""

import sys
import threading
from queue import Queue


class _LogThread(threading.Thread):
    """Writes queued messages to stdout.  A daemon, so it dies with the program."""

    def __init__(self, queue):
        threading.Thread.__init__(self, name="arboreal-log", daemon=True)
        self.queue = queue

    def run(self):
        while True:
            msg = self.queue.get()
            sys.stdout.write(str(msg))
            sys.stdout.flush()


thread_queue = None
log_thread = None


def get_logger(logging):
    """Return an update_log(msg) callable, a no-op one when logging is disabled"""
    global log_thread, thread_queue

    if not logging:
        return lambda _: None

    if log_thread is None:
        thread_queue = Queue()
        log_thread = _LogThread(thread_queue)
        log_thread.start()

    def update_log(msg):
        global log_thread
        if not log_thread.is_alive():
            log_thread = _LogThread(thread_queue)
            log_thread.start()

        thread_queue.put(msg)

    return update_log


def clamp(value, lower, upper):
    """Limit value to the closed range [lower, upper]"""
    return max(lower, min(upper, value))


def rand_in_range(rng, lower, upper):
    """Draw a number between lower and upper from the random source rng"""
    return (rng.random() * (upper - lower)) + lower
