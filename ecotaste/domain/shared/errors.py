"""Domain exceptions for the EcoTaste bounded contexts.

All domain exceptions inherit from EcoTasteError so the API layer can map
them uniformly to error results.
"""


class EcoTasteError(Exception):
    """Base exception for the EcoTaste domain."""

    pass


class ValidationError(EcoTasteError):
    """Raised when a request fails input validation.

    Validation happens before any state is mutated.
    """

    pass


class InvalidCategoryError(ValidationError):
    """Raised when a food category string is not part of the closed enum."""

    pass


class InvalidFoodError(ValidationError):
    """Raised when a food snapshot or menu item has invalid values.

    Examples:
    - Negative carbon footprint
    - Blank name
    - Dessert used as a menu category
    """

    pass


class EmptyMealError(ValidationError):
    """Raised when a meal is logged without any food."""

    pass


class InvalidLimitError(ValidationError):
    """Raised when a ranking limit is lower than 1."""

    pass


class MissingImageError(ValidationError):
    """Raised when a scan is requested without an image payload."""

    pass


class MenuItemNotFoundError(EcoTasteError):
    """Raised when a menu item id does not exist in the catalog."""

    pass


class PermissionDeniedError(EcoTasteError):
    """Raised when the account role does not allow the operation.

    Example: a student trying to edit the cafeteria menu.
    """

    pass


class StatsConflictError(EcoTasteError):
    """Raised when UserStats changed between read and write.

    The stats aggregate is updated with an optimistic version check; a
    concurrent meal log from another device makes the second write fail
    instead of silently losing an update.
    """

    pass


class ScanInProgressError(EcoTasteError):
    """Raised when a second photo scan starts while one is still running."""

    pass
