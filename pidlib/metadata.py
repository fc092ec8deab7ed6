""" Registration metadata for research objects.

There are two shapes. The flat maps are the key value pairs that
lightweight registration calls take (EZID style datacite.* keys and
the _target url). The full document is DataCite XML produced from a
fixed template, the scalar slots are escaped and substituted, the
repeated blocks (creators, contributors, related identifiers) are
built as elements and only serialized when they are dropped into
their slot. """

import re
import xml.etree.ElementTree as ET
from functools import lru_cache
from pathlib import Path
from xml.sax.saxutils import escape
from pidlib import exceptions as exc
from pidlib.identifiers import (DOI_PROTOCOL,
                                HDL_PROTOCOL,
                                PERMA_PROTOCOL,
                                orcidChecksumValid,)
from pidlib.objects import Author, ORCID, ISNI, LCNA
from pidlib.utils import log, logd, isEmpty

UNAVAILABLE = ':unav'
NA_VALUE = 'N/A'
# DataCite rejects anything that does not match [\d]{4} so no 'unknown'
SENTINEL_YEAR = '9999'
REMOVED_TITLE = 'This item has been removed from publication'

template_path = Path(__file__).parent / 'templates' / 'datacite_metadata_template.xml'

_placeholder_regex = re.compile(r'\$\{\w+\}|\{\$\w+\}')
_year_regex = re.compile(r'^\d{4}$')

_name_identifier_schemes = {
    ORCID: 'https://orcid.org/',
    ISNI: 'http://isni.org/isni/',
    LCNA: 'http://id.loc.gov/authorities/names/',
}

_related_identifier_types = {
    DOI_PROTOCOL: 'DOI',
    HDL_PROTOCOL: 'Handle',
    PERMA_PROTOCOL: 'URL',
}


@lru_cache()
def loadTemplate(path=template_path):
    with open(path, 'rt', encoding='utf-8') as f:
        return f.read()


def _orUnavailable(value, *, contains=False):
    if isEmpty(value):
        return UNAVAILABLE

    value = str(value)
    if (NA_VALUE in value) if contains else (value == NA_VALUE):
        return UNAVAILABLE

    return value


def _requireGlobalId(obj):
    global_id = obj.globalId
    if global_id is None:
        raise exc.MetadataValueError(f'{obj!r} has no identifier')

    return global_id


## flat maps

def getTargetUrl(obj, config):
    return config.site_url + obj.target_path + _requireGlobalId(obj).asString()


def generateYear(obj):
    return _orUnavailable(obj.publication_year)


def addBasicMetadata(obj, config, metadata):
    metadata['datacite.creator'] = _orUnavailable(obj.authorString, contains=True)
    metadata['datacite.title'] = _orUnavailable(obj.name)
    metadata['datacite.publisher'] = _orUnavailable(config.publisher)
    metadata['datacite.publicationyear'] = generateYear(obj)
    return metadata


def getMetadataForCreateIndicator(obj, config):
    log.debug(f'create metadata for {obj!r}')
    metadata = addBasicMetadata(obj, config, {})
    metadata['_target'] = getTargetUrl(obj, config)
    return metadata


buildMetadata = getMetadataForCreateIndicator


def getUpdateMetadata(obj, config):
    return addBasicMetadata(obj, config, {})


def getMetadataForTargetURL(obj, config):
    return {'_target': getTargetUrl(obj, config)}


def getMetadataForDestroyed(obj=None):
    """ the object is ignored, nothing about it may leak """
    return {
        'datacite.creator': UNAVAILABLE,
        'datacite.title': REMOVED_TITLE,
        'datacite.publisher': UNAVAILABLE,
        'datacite.publicationyear': SENTINEL_YEAR,
    }


## xml document

def _localName(element):
    return element.tag.rsplit('}', 1)[-1]


def _serialize(elements):
    return ''.join(ET.tostring(e, encoding='unicode') for e in elements)


def identifierTypeFor(global_id):
    return _related_identifier_types[global_id.protocol]


def creatorElement(author):
    creator = ET.Element('creator')
    ET.SubElement(creator, 'creatorName').text = author.name
    has_affiliation = not isEmpty(author.affiliation)
    if not isEmpty(author.id_type) and not isEmpty(author.id_value) and has_affiliation:
        scheme_uri = _name_identifier_schemes.get(author.id_type)
        if scheme_uri is None:
            log.warning(f'unknown name identifier scheme {author.id_type!r} for {author!r}')
        else:
            if author.id_type == ORCID and not orcidChecksumValid(author.id_value):
                log.warning(f'ORCID {author.id_value!r} for {author!r} fails its checksum')

            ET.SubElement(creator, 'nameIdentifier',
                          schemeURI=scheme_uri,
                          nameIdentifierScheme=author.id_type).text = author.id_value

    if has_affiliation:
        ET.SubElement(creator, 'affiliation').text = author.affiliation

    return creator


def contributorElement(contributor):
    element = ET.Element('contributor', contributorType=contributor.contributor_type)
    ET.SubElement(element, 'contributorName').text = contributor.name
    if not isEmpty(contributor.affiliation):
        ET.SubElement(element, 'affiliation').text = contributor.affiliation

    return element


def relatedIdentifiersElement(obj):
    """ datasets point down at their identified files with HasPart
        files point up at their dataset with IsPartOf
        None if there is nothing to point at """
    if obj is None:
        return None

    if obj.isContainer:
        related = [(f.globalId, 'HasPart') for f in obj.files if f.globalId is not None]
    elif obj.isLeaf:
        if obj.owner is None or obj.owner.globalId is None:
            log.debug(f'no identified dataset for {obj!r}, omitting related identifiers')
            return None

        related = [(obj.owner.globalId, 'IsPartOf')]
    else:
        raise TypeError(f'unknown kind {obj.kind!r} for {obj!r}')

    if not related:
        return None

    element = ET.Element('relatedIdentifiers')
    for global_id, relation_type in related:
        ET.SubElement(element, 'relatedIdentifier',
                      relatedIdentifierType=identifierTypeFor(global_id),
                      relationType=relation_type).text = global_id.asString()

    return element


class MetadataTemplate:
    """ The intermediate metadata document, lives only long enough
        to fill in the template. """

    def __init__(self,
                 identifier=None,
                 identifier_type='DOI',
                 title=None,
                 publisher=None,
                 publisher_year=None,
                 description='',
                 authors=tuple(),
                 contacts=tuple(),
                 producers=tuple(),
                 creators=None,
                 template=None):
        self.identifier = identifier
        self.identifier_type = identifier_type
        self.title = title
        self.publisher = publisher
        self.publisher_year = publisher_year
        self.description = description
        self.authors = list(authors)
        self.contacts = list(contacts)
        self.producers = list(producers)
        self.creators = [a.name for a in self.authors] if creators is None else list(creators)
        self._template = template

    @property
    def template(self):
        return loadTemplate() if self._template is None else self._template

    @classmethod
    def fromObject(cls, obj, config):
        global_id = _requireGlobalId(obj)
        return cls(
            # the registry already knows the protocol
            identifier=f'{global_id.authority}/{global_id.identifier}',
            identifier_type=identifierTypeFor(global_id),
            title=obj.name,
            publisher=_orUnavailable(config.publisher),
            publisher_year=obj.publication_year,
            description='' if obj.description is None else obj.description,
            authors=obj.authors,
            contacts=obj.contacts,
            producers=obj.producers,)

    @classmethod
    def destroyed(cls, identifier, identifier_type='DOI'):
        return cls(
            identifier=identifier,
            identifier_type=identifier_type,
            title=REMOVED_TITLE,
            publisher=UNAVAILABLE,
            publisher_year=SENTINEL_YEAR,
            authors=[Author(UNAVAILABLE)],)

    @classmethod
    def fromXml(cls, xml_metadata):
        """ read the scalar fields back out of an existing document """
        try:
            root = ET.fromstring(xml_metadata)
        except ET.ParseError as e:
            raise exc.MetadataValueError('could not parse metadata document') from e

        def first(name):
            for element in root.iter():
                if _localName(element) == name:
                    return element.text

        def attribute(name, key):
            for element in root.iter():
                if _localName(element) == name:
                    return element.get(key)

        creators = [e.text for e in root.iter() if _localName(e) == 'creatorName']
        return cls(
            identifier=first('identifier'),
            identifier_type=attribute('identifier', 'identifierType') or 'DOI',
            title=first('title'),
            publisher=first('publisher'),
            publisher_year=first('publicationYear'),
            creators=creators,)

    def _scalars(self):
        for name in ('identifier', 'title', 'publisher'):
            if getattr(self, name) is None:
                raise exc.MetadataValueError(f'no value for {name}')

        return {
            '${identifier}': self.identifier.strip(),
            '${title}': self.title,
            '${publisher}': self.publisher,
            '${identifierType}': self.identifier_type,
            '${publisherYear}': self.publicationYear(),
            '${description}': '' if self.description is None else self.description,
        }

    def publicationYear(self):
        year = '' if self.publisher_year is None else str(self.publisher_year).strip()
        return year if _year_regex.match(year) else SENTINEL_YEAR

    def creatorsXml(self):
        return _serialize(creatorElement(author) for author in self.authors)

    def contributorsXml(self):
        contacts = [c for c in self.contacts if not isEmpty(c.name)]
        return _serialize(contributorElement(c) for c in contacts + self.producers)

    def relatedIdentifiersXml(self, obj):
        element = relatedIdentifiersElement(obj)
        return '' if element is None else _serialize([element])

    def generateXml(self, obj=None):
        values = {placeholder: escape(value) for placeholder, value in self._scalars().items()}
        values['${creators}'] = self.creatorsXml()
        values['{$contributors}'] = self.contributorsXml()
        values['${relatedIdentifiers}'] = self.relatedIdentifiersXml(obj)

        def substitute(match):
            placeholder = match.group(0)
            if placeholder not in values:
                raise exc.UnresolvedPlaceholderError(f'no value for placeholder {placeholder}')

            return values[placeholder]

        # one pass so substituted values are never rescanned
        return _placeholder_regex.sub(substitute, self.template)


def getMetadataFromObject(obj, config):
    """ DataCite XML for obj, a removal notice if obj was destroyed """
    if obj.destroyed:
        global_id = _requireGlobalId(obj)
        template = MetadataTemplate.destroyed(f'{global_id.authority}/{global_id.identifier}',
                                              identifierTypeFor(global_id))
        xml_metadata = template.generateXml()
    else:
        xml_metadata = MetadataTemplate.fromObject(obj, config).generateXml(obj)

    logd.debug(f'XML to send to DataCite: {xml_metadata}')
    return xml_metadata
