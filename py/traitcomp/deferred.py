# © 2024 Intel Corporation
# SPDX-License-Identifier: MPL-2.0

# Deferred results, for members that finish later

import threading

from .logging import report
from .messages import ETIMEOUT, WLATECOMPLETE

__all__ = (
    'Deferred',
    'deferred',
)

class Deferred(object):
    '''A result that is not available yet.

    A Deferred is completed exactly once, with an (error, value)
    pair. Completing it runs the listeners registered with
    on_complete(), in registration order, and then the terminal
    callback. Listeners registered after completion are invoked right
    away with the stored pair.

    If a timeout (in seconds) is given, the Deferred fails with
    ETIMEOUT unless it is completed in time. The timer runs on its own
    thread; that is the only place where a Deferred is touched from
    outside the thread that created it.'''

    def __init__(self, timeout=None):
        self.is_complete = False
        self.timed_out = False
        self.error = None
        self.value = None
        self.timeout = timeout
        self.listeners = []
        self.callback = None
        self._lock = threading.Lock()
        self._completed = threading.Event()
        self._timer = None
        if timeout:
            self._timer = threading.Timer(timeout, self._expire)
            self._timer.daemon = True
            self._timer.start()

    def __repr__(self):
        state = 'complete' if self.is_complete else 'pending'
        return '<Deferred %s>' % (state,)

    def _finish(self, error, value, timed_out):
        with self._lock:
            if self.is_complete:
                return False
            self.is_complete = True
            self.timed_out = timed_out
            self.error = error
            self.value = value
            (listeners, self.listeners) = (self.listeners, [])
            callback = self.callback
        if self._timer and not timed_out:
            self._timer.cancel()
        # waiters are released once listeners and callback have run
        try:
            for listener in listeners:
                listener(error, value)
            if callable(callback):
                return (True, callback(error, value))
            return (True, None)
        finally:
            self._completed.set()

    def _expire(self):
        self._finish(ETIMEOUT(self), None, True)

    def complete(self, error=None, value=None):
        '''Complete with the given pair; only the first call has an
        effect. Returns the return value of the terminal callback.'''
        finished = self._finish(error, value, False)
        if not finished:
            if self.timed_out:
                report(WLATECOMPLETE(self, self.timeout))
            return None
        return finished[1]

    def done(self, value=None):
        return self.complete(None, value)

    def failed(self, error):
        return self.complete(error)

    def on_complete(self, *listeners):
        with self._lock:
            replay = self.is_complete
            if not replay:
                self.listeners.extend(listeners)
        if replay:
            for listener in listeners:
                listener(self.error, self.value)
        return self

    def set_callback(self, callback):
        '''Install the terminal callback, invoking it immediately if the
        Deferred already completed'''
        with self._lock:
            replay = self.is_complete
            self.callback = callback
        if replay:
            return callback(self.error, self.value)
        return None

    def wait(self, timeout=None):
        '''Block the calling thread until completion; return whether
        the Deferred completed'''
        return self._completed.wait(timeout)

def deferred(timeout=None):
    return Deferred(timeout)
