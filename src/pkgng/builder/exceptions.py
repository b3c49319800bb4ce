class BuildError(Exception):
    pass


class InvalidValueError(BuildError, ValueError):
    def __init__(self, field: str, requirement: str) -> None:
        self.field = field
        self.requirement = requirement
        super().__init__(f"'{field}' must {requirement}")


class DigestError(BuildError):
    pass


class StagingError(BuildError):
    pass


class ManifestReadError(BuildError):
    pass
