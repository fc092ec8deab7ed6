"""Global identifiers are the names that a persistent identifier
registry hands out for research objects. They all have the same three
part shape protocol:authority/identifier where the protocol names the
registry system, the authority is the namespace that the registry has
assigned to us, and the identifier is the part that we mint ourselves.

Identifier strings arrive from users, from the object store, and from
registries, so parsing is strict but never raises. A string that does
not parse is simply not a valid external identifier and callers are
expected to treat None as such. If you want the exception use
GlobalId.fromString.
"""

import re
import ontquery as oq  # temp implementation detail
from pidlib import exceptions as exc
from pidlib.utils import log

DOI_PROTOCOL = 'doi'
HDL_PROTOCOL = 'hdl'
PERMA_PROTOCOL = 'perma'

protocols = (DOI_PROTOCOL, HDL_PROTOCOL, PERMA_PROTOCOL)

doi_authority_regex = re.compile(r'^10\.\d{4,9}')
_strip_regex = re.compile(r"\s+|'|;")


class PidPrefixes(oq.OntCuries):
    # set these manually since, sigh, factory patterns
    _dict = {}
    _n_to_p = {}
    _strie = {}
    _trie = {}


PidPrefixes({DOI_PROTOCOL: 'https://doi.org/',
             HDL_PROTOCOL: 'https://hdl.handle.net/',})


class PidIri(oq.OntId):
    """ resolver form of a global identifier """
    _namespaces = PidPrefixes


def formatIdentifierString(component):
    """ remove whitespace, single quotes, and semicolons """
    if component is None:
        return None

    return _strip_regex.sub('', component)


def hasNullTerminator(component):
    if component is None:
        return False

    return '\0' in component


def checkDoiAuthority(authority):
    return authority is not None and doi_authority_regex.match(authority) is not None


def orcidChecksumValid(orcid):
    """ see
    https://support.orcid.org/hc/en-us/articles/360006897674-Structure-of-the-ORCID-Identifier
    """
    try:
        *digits, check_string = orcid.rsplit('/', 1)[-1].replace('-', '')
        check = 10 if check_string == 'X' else int(check_string)
        total = 0
        for digit_string in digits:
            total = (total + int(digit_string)) * 2

        remainder = total % 11
        result = (12 - remainder) % 11
        return len(digits) == 15 and result == check
    except ValueError:
        return False


class GlobalId(str):
    """ protocol:authority/identifier

        A global id is a string so that it can be used anywhere the
        serialized form is expected, but it keeps its parts around
        and only ever holds a validated triple. """

    def __new__(cls, protocol, authority, identifier):
        self = super().__new__(cls, f'{protocol}:{authority}/{identifier}')
        self._protocol = protocol
        self._authority = authority
        self._identifier = identifier
        self.validate()
        return self

    def __getnewargs__(self):
        return self._protocol, self._authority, self._identifier

    def __repr__(self):
        return f'{self.__class__.__name__}({self._protocol!r}, {self._authority!r}, {self._identifier!r})'

    @property
    def protocol(self):
        return self._protocol

    @property
    def authority(self):
        return self._authority

    @property
    def identifier(self):
        return self._identifier

    def validate(self):
        if self.protocol not in protocols:
            raise exc.MalformedIdentifierError(f'unsupported protocol {self.protocol!r} in {self!r}')

        for component in (self.authority, self.identifier):
            if not component or formatIdentifierString(component) != component:
                raise exc.MalformedIdentifierError(f'bad component {component!r} in {self!r}')

            if hasNullTerminator(component):
                raise exc.MalformedIdentifierError(f'null terminator in {self!r}')

        if '/' in self.authority:
            raise exc.MalformedIdentifierError(f'authority {self.authority!r} contains a /')

        if self.protocol == DOI_PROTOCOL and not checkDoiAuthority(self.authority):
            raise exc.MalformedIdentifierError(f'{self.authority!r} is not a doi authority')

    @classmethod
    def fromString(cls, identifier_string):
        if identifier_string is None:
            raise exc.MalformedIdentifierError('identifier string may not be None')

        if not isinstance(identifier_string, str):
            msg = f'identifier must be a string not {type(identifier_string).__name__}'
            raise exc.MalformedIdentifierError(msg)

        index1 = identifier_string.find(':')
        if index1 <= 0:  # ':' found with one or more characters before it
            msg = f"Error parsing identifier: {identifier_string}: '<protocol>:' not found in string"
            raise exc.MalformedIdentifierError(msg)

        index2 = identifier_string.find('/', index1 + 1)
        if index2 <= 0 or index2 + 1 >= len(identifier_string):
            msg = (f'Error parsing identifier: {identifier_string}: '
                   "':<authority>/<identifier>' not found in string")
            raise exc.MalformedIdentifierError(msg)

        protocol = identifier_string[:index1]
        if protocol not in protocols:
            raise exc.MalformedIdentifierError(f'unsupported protocol {protocol!r}')

        # strip any whitespace, ; and ' rather than failing on them
        authority = formatIdentifierString(identifier_string[index1 + 1:index2])
        identifier = formatIdentifierString(identifier_string[index2 + 1:])
        return cls(protocol, authority, identifier)

    def asString(self):
        return str(self)

    def asUri(self):
        """ resolver uri, None for protocols without a public resolver """
        if self.protocol == PERMA_PROTOCOL:
            return None

        return PidIri(prefix=self.protocol, suffix=f'{self.authority}/{self.identifier}').iri


def parse(identifier_string):
    """ GlobalId or None, never raises """
    try:
        return GlobalId.fromString(identifier_string)
    except exc.MalformedIdentifierError as e:
        log.info(e)
        return None
