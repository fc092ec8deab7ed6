class PidlibError(Exception):
    """ root of everything pidlib raises """


class LocalError(PidlibError):
    """ The problem is on our side and can be fixed here
        without talking to a registry. """


class ConfigurationError(LocalError):
    """ A pid setting is missing or has a value we cannot use. """


class MalformedIdentifierError(LocalError):
    """ The input is not a protocol:authority/identifier string
        for a supported protocol, so no GlobalId is made from it. """


class CounterUnavailableError(LocalError):
    """ The monotonic counter used to mint identifiers has not
        been provisioned in the object store. """
    # not retried, the source itself is absent


class UnassignedOwnerError(LocalError):
    """ A dependent file identifier was requested but the owning
        dataset does not have an identifier yet. """


class CouldNotAssignError(LocalError):
    """ No identifier could be assigned to the object. """


class IdentifierCollisionError(LocalError):
    """ The object store already holds an object bound to this
        global identifier. This is the backstop for the window
        between a uniqueness check and persistence. """


class MetadataValueError(LocalError):
    """ A value required to fill the metadata template is missing. """


class UnresolvedPlaceholderError(LocalError):
    """ A template placeholder survived substitution. This is
        a bug in the template or in the engine, not bad input. """


class CouldNotReachError(PidlibError):
    """ The registry could not be contacted at all. """


class CouldNotReachIndexError(CouldNotReachError):
    """ The existence lookup timed out or the connection failed. """


class RemoteError(PidlibError):
    """ The registry was reached but its answer was not usable. """


class ExistenceUnknownError(RemoteError):
    """ The registry answered but the answer does not say whether
        the identifier is taken. """
    # any status other than ok, 404, 401, 403 and 429


class NotAuthorizedError(RemoteError):
    """ The registry refused to tell us about the identifier
        with the credentials we sent. """
    # 401 and 403


class AccessLimitError(RemoteError):
    """ The registry is rate limiting existence lookups,
        try again later. """
    # 429
