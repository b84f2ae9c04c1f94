"""Error types raised while mapping a dial plan."""


class DialPlanError(Exception):
    """Base class for dial plan mapping failures."""


class MissingFieldError(DialPlanError):
    def __init__(self, field_name: str, row_index: int) -> None:
        super().__init__(f"Record #{row_index} has no '{field_name}' field")
        self.field_name = field_name
        self.row_index = row_index


class EmptyInputError(DialPlanError):
    """Neither gateway nor trunk routes returned any records."""


class AxlQueryError(DialPlanError):
    """The AXL API could not be queried."""


class ConfigError(DialPlanError, ValueError):
    """Connection settings are missing or invalid."""
