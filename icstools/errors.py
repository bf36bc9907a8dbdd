# The errors that can come out of fetching, parsing, and regenerating a calendar. Every error
# carries a chain of context messages so the logs say *where* in the calendar something went
# wrong, while the HTTP layer only ever returns a generic message.


class IcsToolsError(Exception):
    """
    Base class for every error raised by `icstools`. Context is accumulated as the error
    propagates outwards, innermost first.
    """

    def __init__(self, message):
        super().__init__(message)
        self.message = message
        self.context = []

    def with_context(self, message):
        """
        Attaches the given context message to this error and returns it, so it can be
        re-raised directly.
        """

        self.context.append(message)
        return self

    def __str__(self):
        # Outermost context first, like a backtrace read from the top
        return ": ".join([*reversed(self.context), self.message])


class NotConfigured(IcsToolsError):
    def __init__(self, path):
        super().__init__(f"Path {path} is not configured")
        self.path = path


class FetchFailed(IcsToolsError):
    pass


class RemoteNonSuccessStatus(IcsToolsError):
    def __init__(self, url, status_code):
        super().__init__(f"Remote URL {url} did not reply with a successful code: {status_code}")
        self.status_code = status_code


class ParseFailed(IcsToolsError):
    pass


class MultipleCalendarsUnsupported(IcsToolsError):
    def __init__(self, count):
        super().__init__(f"Remote document had {count} calendars, only a single one is supported")
        self.count = count


class UnsupportedComponent(IcsToolsError):
    """
    Raised when a calendar contains a component we can't safely anonymize (alarms, to-dos,
    journals, free/busy blocks, or anything else we don't know about).
    """

    def __init__(self, kind):
        super().__init__(f"Parsed calendar had {kind} components, which are not supported")
        self.kind = kind


class UnknownProperty(IcsToolsError):
    def __init__(self, kind, name):
        super().__init__(f"Unknown property {name} in {kind} (unknown properties are rejected in strict mode)")
        self.kind = kind
        self.name = name


class MissingValue(IcsToolsError):
    def __init__(self, kind, name):
        super().__init__(f"Property {name} in {kind} has no value to pseudonymize")
        self.kind = kind
        self.name = name


class ConfigError(IcsToolsError):
    pass


class MissingSeed(ConfigError):
    def __init__(self):
        super().__init__("No seed configured for pseudonymizing identifiers")


class HashInitFailed(ConfigError):
    pass
