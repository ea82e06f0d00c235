class FitError(Exception):
    """Base class for errors that reject a fit request as a whole."""

    error_code = "FIT_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class UnknownArchetype(FitError):
    error_code = "INVALID_GARMENT_TYPE"

    def __init__(self, archetype: str) -> None:
        super().__init__(f"Invalid garment type: {archetype!r}")
        self.archetype = archetype


class UnknownStrategy(FitError):
    error_code = "INVALID_STRATEGY"

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown fit strategy: {name!r}")
        self.name = name


class MissingProfile(FitError):
    error_code = "MISSING_PROFILE"

    def __init__(self) -> None:
        super().__init__("No user measurements supplied and no saved profile found")
