"""
Pytest configuration and common fixtures for latex2html tests.

This module provides shared fixtures for testing the command line
application, configuration and logging setup. All fixtures follow
camelCase naming convention.
"""

import logging
from pathlib import Path
from typing import Generator

import pytest

# ============================================================================
# Logging Isolation
# ============================================================================


@pytest.fixture(autouse=True)
def restoreRootLogger() -> Generator[None, None, None]:
    """
    Restore root logger handlers and level after each test.

    initLogging() replaces root handlers, which must not leak between tests.
    """
    rootLogger = logging.getLogger()
    savedHandlers = rootLogger.handlers[:]
    savedLevel = rootLogger.level
    yield
    for handler in rootLogger.handlers[:]:
        if handler not in savedHandlers:
            rootLogger.removeHandler(handler)
            handler.close()
    for handler in savedHandlers:
        if handler not in rootLogger.handlers:
            rootLogger.addHandler(handler)
    rootLogger.setLevel(savedLevel)


# ============================================================================
# Document Fixtures
# ============================================================================


@pytest.fixture
def sampleLatex() -> str:
    """
    Provide a small complete LaTeX document.

    Returns:
        str: Document using sections, lists, math and formatting commands
    """
    return (
        "\\documentclass{article}\n"
        "\\title{Fixture}\n"
        "\\begin{document}\n"
        "\\section{Intro}\n"
        "Some \\textbf{bold} text and $a+b$.\n"
        "\\begin{itemize}\n"
        "\\item One\n"
        "\\item Two\n"
        "\\end{itemize}\n"
        "\\end{document}\n"
    )


@pytest.fixture
def workDir(tmp_path: Path, monkeypatch) -> Path:
    """
    Provide a temporary working directory.

    The process is moved into it so no .env or config.toml from the
    repository is picked up.

    Returns:
        Path: Temporary working directory
    """
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def latexFile(workDir: Path, sampleLatex: str) -> Path:
    """
    Write the sample document to a file.

    Returns:
        Path: Path to input.tex inside the working directory
    """
    path = workDir / "input.tex"
    path.write_text(sampleLatex, encoding="utf-8")
    return path
