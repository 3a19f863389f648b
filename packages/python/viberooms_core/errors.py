class EngineError(Exception):
    code: str = "engine_error"

    def __init__(self, message: str = "", *, code: str | None = None):
        super().__init__(message or self.__class__.__name__)
        if code:
            self.code = code


class InvalidContentType(EngineError):
    code = "invalid_content_type"


class InvalidEventOrdering(EngineError):
    code = "invalid_event_ordering"


class InvalidEvent(EngineError):
    code = "invalid_event"


class SchemeMismatch(EngineError):
    code = "scheme_mismatch"


class CatalogLoadError(EngineError):
    code = "catalog_load_error"
