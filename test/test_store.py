import unittest
from concurrent.futures import ThreadPoolExecutor
import pytest
from pidlib import exceptions as exc
from pidlib.config import PidConfig
from pidlib.generators import IdentifierGenerator
from pidlib.identifiers import GlobalId
from pidlib.objects import Dataset
from pidlib.store import MemoryObjectStore, ObjectStore
from pidlib.uniqueness import UniquenessOracle


def assigned(identifier):
    return Dataset('d', protocol='doi', authority='10.5072', identifier=identifier)


class TestMemoryObjectStore(unittest.TestCase):

    def test_bind_and_exists(self):
        store = MemoryObjectStore()
        obj = assigned('FK2/A')
        store.bind(obj)
        assert store.existsWithPid(GlobalId('doi', '10.5072', 'FK2/A'))
        assert store.existsWithPid('doi:10.5072/FK2/A')
        assert not store.existsWithPid(GlobalId('doi', '10.5072', 'FK2/B'))
        assert store.get('doi:10.5072/FK2/A') is obj

    def test_bind_is_idempotent_for_same_object(self):
        store = MemoryObjectStore()
        obj = assigned('FK2/A')
        store.bind(obj)
        store.bind(obj)
        assert len(store) == 1

    def test_collision(self):
        store = MemoryObjectStore([assigned('FK2/A')])
        with pytest.raises(exc.IdentifierCollisionError):
            store.bind(assigned('FK2/A'))

    def test_bind_unassigned(self):
        with pytest.raises(exc.LocalError):
            MemoryObjectStore().bind(Dataset('d'))

    def test_unbind(self):
        obj = assigned('FK2/A')
        store = MemoryObjectStore([obj])
        store.unbind(assigned('FK2/A'))  # not the bound object
        assert len(store) == 1
        store.unbind(obj)
        assert not store.existsWithPid(obj.globalId)

    def test_counter(self):
        store = MemoryObjectStore(counter_start=1)
        assert [store.nextCounterValue() for _ in range(3)] == ['1', '2', '3']

    def test_counter_unavailable(self):
        with pytest.raises(exc.CounterUnavailableError):
            MemoryObjectStore().nextCounterValue()

    def test_counter_threads(self):
        store = MemoryObjectStore(counter_start=0)
        with ThreadPoolExecutor(max_workers=8) as executor:
            values = list(executor.map(lambda _: store.nextCounterValue(), range(200)))

        assert sorted(int(v) for v in values) == list(range(200))

    def test_base_is_abstract(self):
        store = ObjectStore()
        with pytest.raises(NotImplementedError):
            store.existsWithPid(GlobalId('doi', '10.5072', 'A'))

        with pytest.raises(NotImplementedError):
            store.nextCounterValue()


def test_concurrent_minting_is_backstopped_by_bind():
    """ generation does not reserve, bind is what keeps the namespace unique """
    store = MemoryObjectStore()
    config = PidConfig(authority='10.5072', shoulder='FK2/')
    # every generator draws the same candidate so they all race for it
    generator = IdentifierGenerator(config, UniquenessOracle(store),
                                    random_source=lambda: 'SAME01')
    objs = [generator.generateIdentifier(Dataset(f'd{i}')) for i in range(4)]
    assert len({o.globalId for o in objs}) == 1

    def bind(obj):
        try:
            store.bind(obj)
            return True
        except exc.IdentifierCollisionError:
            return False

    with ThreadPoolExecutor(max_workers=4) as executor:
        results = list(executor.map(bind, objs))

    assert results.count(True) == 1
    assert len(store) == 1
