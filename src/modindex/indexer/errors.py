"""Exceptions raised by an indexing run."""


class IndexingError(RuntimeError):
    """Fatal failure of an indexing run.

    The run is all-or-nothing: nothing catches this to carry on with the
    remaining modules. When raised for an I/O problem, ``__cause__`` holds
    the original OSError.
    """
    pass


class DuplicateFileError(IndexingError):
    """A file was registered twice in the component store."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(
            f"File {path} can't be indexed twice. Please check that "
            "inclusion/exclusion patterns produce disjoint sets for main and test files"
        )


class IndexingCancelled(IndexingError):
    """The walk was stopped through its cancellation callback."""
    pass
