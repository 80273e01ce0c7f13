"""Exception taxonomy shared by the server and the client."""


class CotacaoError(Exception):
    """Base class for every failure raised by this package."""


class StorageError(CotacaoError):
    """A database statement failed."""


class StorageUnavailable(StorageError):
    """The database file could not be opened."""


class SchemaFailure(StorageError):
    """The quote table could not be created."""


class PersistenceFailure(StorageError):
    """A quote could not be stored, or the insert ran past its deadline."""


class FetchFailure(CotacaoError):
    """The upstream exchange-rate API could not be reached or decoded."""


class ClientFetchFailure(CotacaoError):
    """The quote server could not be reached or returned an unusable body."""


class FileWriteFailure(CotacaoError):
    """The client could not write its output file."""
