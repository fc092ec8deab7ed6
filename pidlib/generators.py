""" Minting identifiers.

Every strategy produces candidates and asks the uniqueness oracle
about each one until it gets a yes. Nothing is reserved while this
happens, so the store that eventually persists the assignment has to
enforce uniqueness on the triple (see MemoryObjectStore.bind).

The random string strategy has no cap on the number of attempts.
With 36**6 candidates per prefix a run of collisions long enough to
matter is not expected, but nothing here guarantees termination. """

import random
import string
from itertools import count
from pidlib import exceptions as exc
from pidlib.config import (RANDOM_STRING,
                           STORED_PROCEDURE,
                           DEPENDENT,)
from pidlib.identifiers import GlobalId
from pidlib.utils import log

# settings values that older configurations use
_strategy_aliases = {
    'randomString': RANDOM_STRING,
    'storedProcGenerated': STORED_PROCEDURE,
}

_alphanumeric = string.ascii_uppercase + string.digits
_system_random = random.SystemRandom()


def randomAlphanumeric(length=6, *, _choice=_system_random.choice):
    return ''.join(_choice(_alphanumeric) for _ in range(length))


def normalizeStrategy(strategy):
    """ unknown strategies fall back to random-string """
    strategy = _strategy_aliases.get(strategy, strategy)
    if strategy not in (RANDOM_STRING, STORED_PROCEDURE):
        log.warning(f'unknown identifier generation style {strategy!r} using {RANDOM_STRING}')
        return RANDOM_STRING

    return strategy


class IdentifierGenerator:
    """ Assign identifiers to research objects.

        counter and random_source are zero argument callables, they
        default to the oracle's store counter and randomAlphanumeric,
        swap them out to get deterministic sequences. """

    def __init__(self, config, oracle, counter=None, random_source=None):
        self.config = config
        self.oracle = oracle
        self._counter = counter
        self._random_source = randomAlphanumeric if random_source is None else random_source

    def protocolFor(self, obj):
        return self.config.protocol if obj.protocol is None else obj.protocol

    def authorityFor(self, obj):
        return self.config.authority if obj.authority is None else obj.authority

    def _candidate(self, obj, identifier):
        return GlobalId(self.protocolFor(obj), self.authorityFor(obj), identifier)

    def _isDependent(self, obj):
        return obj.isLeaf and self.config.datafile_pid_format == DEPENDENT

    def prefixFor(self, obj):
        """ datasets and independent files get the shoulder
            dependent files nest under the owner's identifier """
        if self._isDependent(obj):
            owner = obj.owner
            if owner is None or owner.identifier is None:
                raise exc.UnassignedOwnerError(f'owner of {obj!r} has no identifier')

            return owner.identifier + '/'

        return self.config.shoulder

    def assign(self, obj, strategy=None, prepend=None):
        """ return an identifier string that is unique for obj's
            protocol and authority right now, or None if the
            strategy could not produce one """

        if self.authorityFor(obj) is None:
            raise exc.ConfigurationError(f'no authority for {obj!r}')

        strategy = normalizeStrategy(
            self.config.identifier_generation_style if strategy is None else strategy)
        if prepend is None:
            prepend = self.prefixFor(obj)

        if strategy == STORED_PROCEDURE:
            if self._isDependent(obj):
                return self._fromDependentCounter(obj, prepend)
            else:
                return self._fromStoredProcedure(obj, prepend)

        return self._asRandomString(obj, prepend)

    def _asRandomString(self, obj, prepend):
        while True:
            identifier = prepend + self._random_source().upper()
            if self.oracle.isUnique(self._candidate(obj, identifier)):
                return identifier

            log.debug(f'collision on {identifier} retrying')

    def _fromStoredProcedure(self, obj, prepend):
        counter = self.oracle.store.nextCounterValue if self._counter is None else self._counter
        while True:
            try:
                value = counter()
            except exc.CounterUnavailableError as e:
                log.error(f'cannot generate identifier for {obj!r}: {e}')
                return None

            if value is None:
                log.error(f'identifier counter returned nothing for {obj!r}')
                return None

            identifier = prepend + str(value)
            if self.oracle.isUnique(self._candidate(obj, identifier)):
                return identifier

            log.debug(f'collision on {identifier} retrying')

    def _fromDependentCounter(self, obj, prepend):
        """ only for files whose identifiers live under their dataset """
        # TODO one lookup for the largest existing suffix instead of
        # walking up from 1, adding n files costs n**2/2 lookups
        for value in count(1):
            identifier = prepend + str(value)
            if self.oracle.isUnique(self._candidate(obj, identifier)):
                return identifier

    def generateDatasetIdentifier(self, dataset):
        return self.assign(dataset)

    def generateDataFileIdentifier(self, datafile):
        return self.assign(datafile)

    def generateIdentifier(self, obj):
        """ assign and write back protocol, authority, and identifier

            a protocol or authority that is already set on the object
            is kept, this is how legacy identifiers from another
            authority survive """
        protocol = self.protocolFor(obj)
        authority = self.authorityFor(obj)
        identifier = self.assign(obj)
        if identifier is None:
            raise exc.CouldNotAssignError(f'could not assign identifier to {obj!r}')

        obj.identifier = identifier
        if obj.protocol is None:
            obj.protocol = protocol

        if obj.authority is None:
            obj.authority = authority

        return obj
