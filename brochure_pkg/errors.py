"""
Exceptions raised by the Brochure render pipeline.

Asset lookups never raise; they log and degrade. Everything here aborts the
render it was raised from.
"""


class BrochureError(Exception):
    """Base class for all Brochure errors."""


class MissingFileError(BrochureError):
    """A required text file (include, partial, script manifest) could not be read."""

    def __init__(self, filename, reason=None):
        self.filename = filename
        self.reason = reason
        message = f"included file {filename} not found"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class CircularIncludeError(BrochureError):
    """An include directive re-entered a file that is still being expanded."""

    def __init__(self, chain):
        self.chain = list(chain)
        super().__init__("circular include: " + " -> ".join(self.chain))


class FrontMatterError(BrochureError):
    """The YAML front matter block could not be parsed."""


class TemplateRenderError(BrochureError):
    """The page layout could not be loaded or rendered."""
