__all__ = (
    "InvalidStateError",
    "MissingValueError",
    "StoreError",
    "UnhandledActionError",
)


class StoreError(Exception):
    pass


class InvalidStateError(StoreError):
    pass


class MissingValueError(StoreError, KeyError):
    def __init__(self, key: object, expected_type: object = None) -> None:
        self.key = key
        self.expected_type = expected_type

        if expected_type is None:
            message = f"no value stored for {key!r}"
        else:
            message = f"no {_type_name(expected_type)} value stored for {key!r}"

        super().__init__(message)

    def __str__(self) -> str:
        return str(self.args[0])


class UnhandledActionError(StoreError, TypeError):
    def __init__(self, action: object) -> None:
        self.action = action

        super().__init__(f"unhandled action {type(action).__qualname__}")


def _type_name(value: object) -> str:
    return getattr(value, "__qualname__", None) or repr(value)
