""" Read only views of the remote registries that own identifier
namespaces. The only question asked here is whether a global id
already exists remotely, registering, updating and deleting are the
business of whatever sends the metadata document. """

import requests
from pidlib import exceptions as exc
from pidlib.identifiers import DOI_PROTOCOL, HDL_PROTOCOL


def existence_raise_logic(resp):
    """ map a failed existence lookup onto pidlib errors

        404 is not an error here, it is the answer """
    try:
        resp.raise_for_status()
    except requests.exceptions.HTTPError as e:
        if resp.status_code in (401, 403):
            msg = f'Not authorized due to {resp.status_code} at {resp.url}'
            raise exc.NotAuthorizedError(msg) from e
        elif resp.status_code == 429:
            msg = f'Rate limited due to {resp.status_code} at {resp.url}'
            raise exc.AccessLimitError(msg) from e
        else:
            msg = f'Existence unknown due to {resp.status_code} at {resp.url}'
            raise exc.ExistenceUnknownError(msg) from e


class RegistryClient:
    """ Base class for registry collaborators """

    protocol = None
    default_api = None
    _headers = {}

    def __init__(self, api=None, timeout=10, session=None):
        self.api = (self.default_api if api is None else api).rstrip('/')
        self.timeout = timeout
        self._session = requests.Session() if session is None else session

    def __repr__(self):
        return f'{self.__class__.__name__}({self.api!r})'

    def _existence_url(self, global_id):
        raise NotImplementedError('Implement in subclass')

    def exists(self, global_id):
        """ True if the registry knows global_id, False if it says it
            does not, raises if the registry could not answer """
        url = self._existence_url(global_id)
        try:
            resp = self._session.get(url, headers=self._headers, timeout=self.timeout)
        except (requests.exceptions.Timeout,
                requests.exceptions.ConnectionError) as e:
            raise exc.CouldNotReachIndexError(url) from e

        if resp.ok:
            return True
        elif resp.status_code == 404:
            return False

        existence_raise_logic(resp)


class DataciteRegistry(RegistryClient):
    """ https://support.datacite.org/docs/api-get-doi """

    protocol = DOI_PROTOCOL
    default_api = 'https://api.datacite.org'
    _headers = {'Accept': 'application/vnd.api+json'}

    def _existence_url(self, global_id):
        return f'{self.api}/dois/{global_id.authority}/{global_id.identifier}'


class HandleRegistry(RegistryClient):
    """ http://www.handle.net/proxy_servlet.html """

    protocol = HDL_PROTOCOL
    default_api = 'https://hdl.handle.net'
    _headers = {'Accept': 'application/json'}

    def _existence_url(self, global_id):
        return f'{self.api}/api/handles/{global_id.authority}/{global_id.identifier}'


_registries = {r.protocol: r for r in (DataciteRegistry, HandleRegistry)}


def registryFor(config):
    """ registry client for the configured protocol or None if
        the protocol has no remote registry (e.g. perma) """
    if config.protocol not in _registries:
        return None

    return _registries[config.protocol](api=config.registry_api,
                                        timeout=config.registry_timeout)
