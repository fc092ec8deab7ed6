from collections import namedtuple
import orthauth as oa
from pidlib import exceptions as exc
from pidlib.identifiers import protocols, DOI_PROTOCOL, checkDoiAuthority

auth = oa.configure_here('auth-config.py', __name__)

RANDOM_STRING = 'random-string'
STORED_PROCEDURE = 'stored-procedure'

DEPENDENT = 'DEPENDENT'
INDEPENDENT = 'INDEPENDENT'
datafile_pid_formats = (DEPENDENT, INDEPENDENT)

_fields = (
    'protocol',
    'authority',
    'shoulder',
    'identifier_generation_style',
    'datafile_pid_format',
    'site_url',
    'publisher',
    'registry_api',
    'registry_timeout',
)

_defaults = (
    DOI_PROTOCOL,
    None,
    '',
    RANDOM_STRING,
    DEPENDENT,
    '',
    None,
    None,
    10,
)


class PidConfig(namedtuple('PidConfig', _fields, defaults=_defaults)):
    """ Read only snapshot of the settings that identifier generation
        and metadata synthesis depend on.

        Pass one of these in explicitly rather than reading settings
        from deep inside the generator, that way tests can hand in a
        fixed configuration and nothing has to touch process state. """

    __slots__ = ()

    def __new__(cls, *args, **kwargs):
        self = super().__new__(cls, *args, **kwargs)
        self.validate()
        return self

    def validate(self):
        if self.protocol not in protocols:
            raise exc.ConfigurationError(f'unsupported protocol {self.protocol!r}')

        if (self.protocol == DOI_PROTOCOL and
            self.authority is not None and
            not checkDoiAuthority(self.authority)):
            raise exc.ConfigurationError(f'{self.authority!r} is not a doi authority')

        if self.datafile_pid_format not in datafile_pid_formats:
            msg = f'unknown datafile pid format {self.datafile_pid_format!r}'
            raise exc.ConfigurationError(msg)

        if self.shoulder is None:
            raise exc.ConfigurationError('shoulder may be empty but not None')

        if self.registry_timeout is not None and self.registry_timeout <= 0:
            raise exc.ConfigurationError(f'bad registry timeout {self.registry_timeout!r}')

    def replace(self, **kwargs):
        """ validated version of _replace """
        return self.__class__(**{**self._asdict(), **kwargs})

    @classmethod
    def fromAuth(cls, auth=auth):
        """ snapshot the current orthauth configuration """
        def get(name, default):
            value = auth.get(name)
            return default if value is None else value

        timeout = get('registry-timeout', 10)
        try:
            timeout = float(timeout)
        except (TypeError, ValueError) as e:
            raise exc.ConfigurationError(f'bad registry timeout {timeout!r}') from e

        return cls(
            protocol=get('pid-protocol', DOI_PROTOCOL),
            authority=auth.get('pid-authority'),
            shoulder=get('pid-shoulder', ''),
            identifier_generation_style=get('identifier-generation-style', RANDOM_STRING),
            datafile_pid_format=get('datafile-pid-format', DEPENDENT),
            site_url=get('site-url', ''),
            publisher=auth.get('publisher'),
            registry_api=auth.get('registry-api'),
            registry_timeout=timeout,)
