"""Utility functions for the CLI."""


def format_quantity(value: float, thousands: bool = False) -> str:
    """
    Format a quantity with 2 decimal places.

    Args:
        value: Value to format
        thousands: Insert comma thousand separators

    Returns:
        Formatted string like "12345.68", or "12,345.68" with separators

    Examples:
        >>> format_quantity(150.5)
        '150.50'
        >>> format_quantity(12345.678, thousands=True)
        '12,345.68'
    """
    if thousands:
        return f"{value:,.2f}"
    return f"{value:.2f}"


def redact(text: str, secret: str, placeholder: str = "***") -> str:
    """
    Replace every occurrence of a secret in text.

    Examples:
        >>> redact("bad key abc123", "abc123")
        'bad key ***'
    """
    if not secret:
        return text
    return text.replace(secret, placeholder)
