# errors.py


class HolderScanError(Exception):
    """Base for every fatal condition the scan reports to the operator."""


class ConfigError(HolderScanError):
    pass


class StateCorruptError(HolderScanError):
    pass


class FetchError(HolderScanError):
    pass


class PersistError(HolderScanError):
    pass


class MalformedPageError(Exception):
    """Page body could not be decoded. The scanner stops softly on this."""
