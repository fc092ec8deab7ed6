from pidlib.utils import log


class UniquenessOracle:
    """ Decide whether a candidate global id is free to allocate.

        The local object store is authoritative and is asked first.
        The remote registry is only asked if the local store has no
        match, and anything that goes wrong while asking it is taken
        to mean that the id is free. Minting must keep working while
        the registry is unreachable, a real collision will come back
        as a conflict when the id is registered.

        There is no reservation, a true answer only holds until the
        next write to the store or the registry. """

    def __init__(self, store, registry=None):
        self.store = store
        self.registry = registry

    def isUnique(self, global_id):
        if self.store.existsWithPid(global_id):
            log.debug(f'{global_id} exists locally')
            return False

        if self.registry is None:
            return True

        try:
            return not self.registry.exists(global_id)
        except Exception as e:
            # we can live with failure, it means not found remotely
            log.warning(f'registry lookup failed for {global_id} assuming unique: {e!r}')
            return True
