"""Domain exceptions."""


class ScaleTicketError(Exception):
    """Base class for scaleticket errors."""


class IncompleteInputError(ScaleTicketError):
    """Ticket computation requested on an incomplete extraction or vehicle."""


class CatalogError(ScaleTicketError):
    """Vehicle catalog could not be loaded."""
