from pidlib import exceptions as exc
from pidlib.identifiers import (GlobalId,
                                parse,
                                formatIdentifierString,)
from pidlib.objects import (Dataset,
                            DataFile,
                            Author,
                            Contact,
                            Producer,)
from pidlib.config import PidConfig
from pidlib.store import (ObjectStore,
                          MemoryObjectStore,)
from pidlib.registry import (RegistryClient,
                             DataciteRegistry,
                             HandleRegistry,
                             registryFor,)
from pidlib.uniqueness import UniquenessOracle
from pidlib.generators import IdentifierGenerator
from pidlib.metadata import (MetadataTemplate,
                             buildMetadata,
                             getMetadataFromObject,)


def generatorFor(config, store, registry=None):
    """ wire up a generator, the registry for the
        configured protocol is used unless one is passed in """
    if registry is None:
        registry = registryFor(config)

    return IdentifierGenerator(config, UniquenessOracle(store, registry))


__version__ = '0.0.1.dev0'
