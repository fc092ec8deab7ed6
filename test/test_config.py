import unittest
import orthauth as oa
import pytest
from pidlib import config
from pidlib import exceptions as exc
from pidlib.config import PidConfig, RANDOM_STRING, DEPENDENT, INDEPENDENT


def runtime_auth(**variables):
    ablob = config.auth._blob
    ublob = {'auth-variables': variables}
    return oa.AuthConfig.runtimeConfig(ablob, ublob)


class TestPidConfig(unittest.TestCase):

    def test_defaults(self):
        c = PidConfig()
        assert c.protocol == 'doi'
        assert c.authority is None
        assert c.shoulder == ''
        assert c.identifier_generation_style == RANDOM_STRING
        assert c.datafile_pid_format == DEPENDENT
        assert c.registry_timeout == 10

    def test_immutable(self):
        c = PidConfig()
        with pytest.raises(AttributeError):
            c.shoulder = 'FK2/'

    def test_replace(self):
        c = PidConfig(authority='10.5072')
        d = c.replace(shoulder='FK2/', datafile_pid_format=INDEPENDENT)
        assert d.shoulder == 'FK2/'
        assert d.authority == '10.5072'
        assert c.shoulder == ''
        with pytest.raises(exc.ConfigurationError):
            c.replace(datafile_pid_format='SIDEWAYS')

    def test_invalid(self):
        bads = (
            dict(protocol='ark'),
            dict(protocol='doi', authority='11.5072'),
            dict(datafile_pid_format='dependent'),
            dict(shoulder=None),
            dict(registry_timeout=0),
        )
        for kwargs in bads:
            with pytest.raises(exc.ConfigurationError):
                PidConfig(**kwargs)

    def test_handle_authority_not_doi_checked(self):
        assert PidConfig(protocol='hdl', authority='1902.1').authority == '1902.1'

    def test_unknown_style_is_kept(self):
        # falls back at dispatch time
        assert PidConfig(identifier_generation_style='lol').identifier_generation_style == 'lol'


class TestFromAuth(unittest.TestCase):

    def test_from_auth(self):
        auth = runtime_auth(**{'pid-authority': '10.5072',
                               'pid-shoulder': 'FK2/',
                               'identifier-generation-style': 'stored-procedure',
                               'datafile-pid-format': 'INDEPENDENT',
                               'site-url': 'https://data.example.org',
                               'publisher': 'Example Repository',
                               'registry-timeout': '2.5',})
        c = PidConfig.fromAuth(auth)
        assert c.protocol == 'doi'
        assert c.authority == '10.5072'
        assert c.shoulder == 'FK2/'
        assert c.identifier_generation_style == 'stored-procedure'
        assert c.datafile_pid_format == INDEPENDENT
        assert c.site_url == 'https://data.example.org'
        assert c.publisher == 'Example Repository'
        assert c.registry_timeout == 2.5

    def test_from_auth_defaults(self):
        c = PidConfig.fromAuth(runtime_auth())
        assert c.shoulder == ''
        assert c.identifier_generation_style == RANDOM_STRING
        assert c.datafile_pid_format == DEPENDENT
        assert c.registry_timeout == 10

    def test_from_auth_bad_timeout(self):
        with pytest.raises(exc.ConfigurationError):
            PidConfig.fromAuth(runtime_auth(**{'registry-timeout': 'soon'}))
