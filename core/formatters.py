# core/formatters.py

# all pure text utilities
# must never import from models!

# === generic text formatters ===


def format_banner_text(title: str, width: int = 40) -> str:
    line = "=" * width
    centered_title = f"{title:^{width}}"

    return f"{line}\n{centered_title}\n{line}"


# === score formatters ===


def format_score(score: float) -> str:
    return f"{score:.1f}"


def format_score_with_letter(score: float, letter: str) -> str:
    return f"{format_score(score)} {letter}"


def format_weight(weight: float) -> str:
    return f"{int(weight)}%"


def format_weight_total(total: float) -> str:
    flag = "" if round(total) == 100 else " [DOES NOT TOTAL 100%]"
    return f"Total: {format_weight(total)}{flag}"
