"""
Exceptions raised while loading a marker geometry file.

Every failure is a LoadError; the CLI maps each family to its exit status.
"""


class LoadError(Exception):
    exit_code = 1


class ReadError(LoadError):
    exit_code = 2


class TokenizeError(LoadError):
    exit_code = 3

    def __init__(self, message: str, position: int):
        super().__init__(f"{message} at byte {position}")
        self.position = position


class InvalidJSONError(TokenizeError):
    pass


class PartialJSONError(TokenizeError):
    pass


class TokenCapacityError(TokenizeError):
    pass


class SchemaError(LoadError):
    exit_code = 4


class DimensionError(SchemaError):
    pass


class AllocationError(LoadError):
    exit_code = 5
