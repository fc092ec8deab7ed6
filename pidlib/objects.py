""" Research objects that identifiers are minted for.

These mirror just enough of the repository object layer to drive
generation and metadata. There are two kinds, datasets which own
files, and files which point back to the dataset that owns them.
Behavior that differs between the kinds lives with the code that
needs it and dispatches on ``kind`` explicitly. """

from pidlib.identifiers import GlobalId

CONTAINER = 'dataset'
LEAF = 'file'

# id types that DataCite knows how to express as a nameIdentifier
ORCID = 'ORCID'
ISNI = 'ISNI'
LCNA = 'LCNA'
author_id_types = (ORCID, ISNI, LCNA)


class Author:
    def __init__(self, name, affiliation=None, id_type=None, id_value=None):
        self.name = name
        self.affiliation = affiliation
        self.id_type = id_type
        self.id_value = id_value

    def __repr__(self):
        return f'{self.__class__.__name__}({self.name!r})'


class Contact:
    contributor_type = 'ContactPerson'

    def __init__(self, name, affiliation=''):
        self.name = name
        self.affiliation = affiliation

    def __repr__(self):
        return f'{self.__class__.__name__}({self.name!r})'


class Producer(Contact):
    contributor_type = 'Producer'


class ResearchObject:
    """ shared fields, use Dataset or DataFile """

    kind = None
    target_path = None

    def __init__(self, name=None, *,
                 protocol=None,
                 authority=None,
                 identifier=None,
                 authors=None,
                 publication_year=None,
                 description=None,
                 destroyed=False):
        self.name = name
        self.protocol = protocol
        self.authority = authority
        self.identifier = identifier
        self._authors = list(authors) if authors else []
        self._publication_year = publication_year
        self.description = description
        self.destroyed = destroyed

    def __repr__(self):
        gid = self.globalId
        return f'<{self.__class__.__name__} {self.name!r} {gid if gid else "unassigned"}>'

    @property
    def isContainer(self):
        return self.kind == CONTAINER

    @property
    def isLeaf(self):
        return self.kind == LEAF

    @property
    def globalId(self):
        """ None until all three parts have been assigned """
        if self.protocol is None or self.authority is None or self.identifier is None:
            return None

        return GlobalId(self.protocol, self.authority, self.identifier)

    @property
    def authors(self):
        return self._authors

    @authors.setter
    def authors(self, value):
        self._authors = list(value)

    @property
    def authorString(self):
        return '; '.join(a.name for a in self.authors if a.name)

    @property
    def publication_year(self):
        return self._publication_year

    @publication_year.setter
    def publication_year(self, value):
        self._publication_year = value

    def destroy(self):
        self.destroyed = True


class Dataset(ResearchObject):

    kind = CONTAINER
    target_path = '/dataset.xhtml?persistentId='

    def __init__(self, name=None, *, files=None, contacts=None, producers=None, **kwargs):
        super().__init__(name, **kwargs)
        self.files = []
        self.contacts = list(contacts) if contacts else []
        self.producers = list(producers) if producers else []
        for datafile in (files or []):
            self.addFile(datafile)

    def addFile(self, datafile):
        datafile.owner = self
        self.files.append(datafile)
        return datafile


class DataFile(ResearchObject):
    """ file level metadata that is not set falls back to the owner """

    kind = LEAF
    target_path = '/file.xhtml?persistentId='

    def __init__(self, name=None, *, owner=None, **kwargs):
        super().__init__(name, **kwargs)
        self.owner = None
        if owner is not None:
            owner.addFile(self)

    @property
    def authors(self):
        if not self._authors and self.owner is not None:
            return self.owner.authors

        return self._authors

    @authors.setter
    def authors(self, value):
        self._authors = list(value)

    @property
    def contacts(self):
        return [] if self.owner is None else self.owner.contacts

    @property
    def producers(self):
        return [] if self.owner is None else self.owner.producers

    @property
    def publication_year(self):
        if self._publication_year is None and self.owner is not None:
            return self.owner.publication_year

        return self._publication_year

    @publication_year.setter
    def publication_year(self, value):
        self._publication_year = value
