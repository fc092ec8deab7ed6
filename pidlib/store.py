""" The object store is the local source of truth for which global
identifiers are already taken. Real deployments back this with their
database, the in memory version is for tests and small tools. """

import threading
from pidlib import exceptions as exc


class ObjectStore:
    """ Base class for object store collaborators """

    def existsWithPid(self, global_id):
        """ True if any object is already bound to global_id """
        raise NotImplementedError('Implement in subclass')

    def nextCounterValue(self):
        """ next value from the monotonic identifier counter as a string
            raise CounterUnavailableError if there is no counter """
        raise NotImplementedError('Implement in subclass')


class MemoryObjectStore(ObjectStore):
    """ counter_start=None means the counter was never provisioned """

    def __init__(self, objects=tuple(), counter_start=None):
        self._lock = threading.Lock()
        self._bound = {}
        self._counter = counter_start
        for obj in objects:
            self.bind(obj)

    def __len__(self):
        return len(self._bound)

    def existsWithPid(self, global_id):
        with self._lock:
            return str(global_id) in self._bound

    def nextCounterValue(self):
        with self._lock:
            if self._counter is None:
                raise exc.CounterUnavailableError('identifier counter has not been provisioned')

            value = self._counter
            self._counter += 1

        return str(value)

    def bind(self, obj):
        """ persist the identifier assignment of obj

            the triple is unique here, a second object with the same
            global id fails even if generation said it was free """
        global_id = obj.globalId
        if global_id is None:
            raise exc.LocalError(f'{obj!r} has no identifier to bind')

        key = str(global_id)
        with self._lock:
            if key in self._bound and self._bound[key] is not obj:
                raise exc.IdentifierCollisionError(f'{global_id} is already bound')

            self._bound[key] = obj

        return global_id

    def unbind(self, obj):
        global_id = obj.globalId
        with self._lock:
            if global_id is not None and self._bound.get(str(global_id)) is obj:
                del self._bound[str(global_id)]

    def get(self, global_id):
        with self._lock:
            return self._bound.get(str(global_id))
