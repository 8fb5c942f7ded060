def format_rooms(count: float) -> str:
    # one decimal place: 3 -> "3.0", 2.5 -> "2.5"
    return f"{count:.1f}"


def format_count(count: int) -> str:
    return str(int(count))
