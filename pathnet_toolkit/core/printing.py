"""Printing helpers for CLI tools."""

from __future__ import annotations


def print_banner(title: str, width: int = 80, char: str = "=") -> None:
    print(char * width)
    print(title)
    print(char * width)


def print_section(title: str, width: int = 80, char: str = "-") -> None:
    print()
    print(title)
    print(char * min(width, max(len(title), 1)))


def print_kv(key: str, value: object, key_width: int = 24) -> None:
    print(f"  {key:<{key_width}} {value}")
