"""
Flag field extraction for command strings.

A command is a sequence of `/flag:value` tokens. These helpers pull the value
following a flag and count the delimiters so commands can reject stray flags.
"""

FLAG_DELIMITER = "/"


def extract_field(text: str, flag: str) -> str:
    """
    Extract the value that follows a flag.

    Args:
        text: The command string.
        flag: The full flag token including delimiters, e.g. "/height:".

    Returns:
        The trimmed text between the flag and the next "/" (or end of string),
        or an empty string if the flag is absent or has nothing after it.
    """
    index = text.find(flag)
    if index == -1:
        return ""

    start = index + len(flag)
    end = text.find(FLAG_DELIMITER, start)
    if end == -1:
        end = len(text)

    return text[start:end].strip()


def count_delimiter(text: str, delimiter: str = FLAG_DELIMITER) -> int:
    """Count occurrences of a delimiter character in a command string."""
    return text.count(delimiter)


def has_flag(text: str, flag: str) -> bool:
    """Whether the flag token appears in the command string."""
    return flag in text
