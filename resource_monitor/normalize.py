"""Canonical display names for CPU and GPU marketing strings.

Both cleaners run the same routine: remove every token in a replacement
table (exact, case-sensitive substrings), then trim and collapse runs of
spaces. The tables differ because CPU and GPU vendor noise differs.
"""
from __future__ import annotations

from typing import Mapping

CPU_TOKENS: dict[str, str] = dict.fromkeys(
    ("Intel", "AMD", "(R)", "(TM)", "Core", "Processor", "CPU"), ""
)

GPU_TOKENS: dict[str, str] = dict.fromkeys(
    (
        # chip vendors
        "NVIDIA",
        "AMD",
        "Intel",
        "(R)",
        "(TM)",
        # corporate suffixes
        "Corporation",
        "Inc.",
        "Co.",
        "Ltd.",
        # board partners
        "ASUS",
        "Gigabyte",
        "MSI",
        "Micro-Star",
        "EVGA",
        "Zotac",
        "Palit",
        "Galax",
        "PNY",
        "Colorful",
        "Inno3D",
        # product lines
        "GeForce",
        "Radeon",
        "Arc",
        "Graphics",
    ),
    "",
)

TRADEMARK_TOKENS: dict[str, str] = dict.fromkeys(("(R)", "(TM)"), "")

# Checked in order; the first match wins, so "RTX" shadows "RX".
SERIES_TAGS: tuple[tuple[str, str], ...] = (
    ("rtx", "RTX"),
    ("gtx", "GTX"),
    ("rx", "RX"),
)

MIN_NAME_LENGTH = 3


def strip_tokens(text: str, table: Mapping[str, str]) -> str:
    """Apply every replacement in ``table`` until none matches any more.

    Removing one token can splice together another one (``"InCoretel"``
    becomes ``"Intel"``), so the table is reapplied to a fixed point.
    """
    while True:
        stripped = text
        for token, replacement in table.items():
            stripped = stripped.replace(token, replacement)
        if stripped == text:
            return stripped
        text = stripped


def collapse_spaces(text: str) -> str:
    while "  " in text:
        text = text.replace("  ", " ")
    return text


def clean_name(text: str, table: Mapping[str, str]) -> str:
    return collapse_spaces(strip_tokens(text, table).strip())


def clean_cpu_name(name: str) -> str:
    return clean_name(name, CPU_TOKENS)


def clean_gpu_name(model: str) -> str:
    name = strip_tokens(model, GPU_TOKENS).strip()

    original_lower = model.lower()
    for needle, tag in SERIES_TAGS:
        if needle in original_lower:
            name = f"{tag} {name.replace(tag, '').strip()}"
            break

    name = collapse_spaces(name).strip()
    if len(name) < MIN_NAME_LENGTH:
        name = clean_name(model, TRADEMARK_TOKENS)
    return name
