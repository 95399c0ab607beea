from __future__ import annotations


class FetchError(Exception):
    """Base class for failures while acquiring rustdoc JSON from docs.rs."""

    def __init__(self, message: str, *, crate: str, version: str) -> None:
        super().__init__(message)
        self.crate = crate
        self.version = version


class CrateNotFoundError(FetchError):
    def __init__(self, *, crate: str, version: str) -> None:
        super().__init__(f"not found: {crate} v{version}", crate=crate, version=version)


class DocsUnavailableError(FetchError):
    """docs.rs answered 406: the build predates rustdoc JSON support."""

    def __init__(self, *, crate: str, version: str) -> None:
        super().__init__(
            f"rustdoc JSON not available for {crate} v{version} "
            "(requires docs.rs builds after 2025-05-23)",
            crate=crate,
            version=version,
        )


class TransportError(FetchError):
    def __init__(
        self,
        message: str,
        *,
        crate: str,
        version: str,
        status: int | None = None,
    ) -> None:
        super().__init__(message, crate=crate, version=version)
        self.status = status


class DecompressError(FetchError):
    def __init__(self, *, crate: str, version: str, cause: BaseException) -> None:
        super().__init__(
            f"failed to decompress rustdoc JSON for {crate}: {cause}",
            crate=crate,
            version=version,
        )


class ParseError(FetchError):
    def __init__(self, *, crate: str, version: str, cause: BaseException) -> None:
        super().__init__(
            f"failed to parse rustdoc JSON for {crate}: {cause}",
            crate=crate,
            version=version,
        )


class FormatMismatchError(FetchError):
    """The payload failed to parse and declares a different format version."""

    def __init__(
        self,
        *,
        crate: str,
        version: str,
        expected: int,
        actual: int,
        cause: BaseException,
    ) -> None:
        super().__init__(
            f"failed to parse rustdoc JSON for {crate}: docs.rs serves format "
            f"v{actual} but crate-docs supports v{expected} -- consider "
            f"upgrading crate-docs: {cause}",
            crate=crate,
            version=version,
        )
        self.expected = expected
        self.actual = actual


class ItemNotFoundError(LookupError):
    """A module or item path did not resolve inside a crate's documentation."""
