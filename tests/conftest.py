"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Iterator
from datetime import UTC, datetime
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest
from dude.core.config import DudeConfig
from dude.models.package import InstalledPackage, InstallReason, PackageRecord
from dude.models.removal import RemovalResult


@pytest.fixture
def mock_pacman_qi_output() -> str:
    """Sample ``pacman -Qi`` output for testing.

    Contains one explicit package, two unreferenced dependencies, one
    dependency that is still required and one kept alive only as an
    optional dependency.
    """
    return """Name            : firefox
Version         : 128.0-1
Description     : Fast, Private & Safe Web Browser
Architecture    : x86_64
Depends On      : gtk3  libxt  nss
Optional Deps   : hunspell-en_US: Spell checking
Required By     : None
Optional For    : None
Installed Size  : 245.32 MiB
Install Date    : Mon Jan 15 10:30:00 2024
Install Reason  : Explicitly installed

Name            : python-setuptools
Version         : 1:69.0.3-1
Description     : Easily download, build, install, upgrade, and uninstall Python packages
Architecture    : any
Required By     : None
Optional For    : None
Installed Size  : 6.46 MiB
Install Date    : Tue Feb 20 08:00:00 2024
Install Reason  : Installed as a dependency for another package

Name            : go
Version         : 2:1.22.0-1
Description     : Core compiler tools for the Go programming language
Architecture    : x86_64
Required By     : None
Optional For    : None
Installed Size  : 220.50 MiB
Install Date    : Wed Mar 06 12:00:00 2024
Install Reason  : Installed as a dependency for another package

Name            : gtk3
Version         : 1:3.24.41-1
Description     : GObject-based multi-platform GUI toolkit
Architecture    : x86_64
Required By     : firefox  gnome-shell  nautilus
                  zenity
Optional For    : None
Installed Size  : 54.10 MiB
Install Date    : Mon Jan 15 10:29:00 2024
Install Reason  : Installed as a dependency for another package

Name            : hunspell-en_US
Version         : 2020.12.07-4
Description     : US English hunspell dictionaries
Architecture    : any
Required By     : None
Optional For    : firefox
Installed Size  : 1018.00 KiB
Install Date    : Mon Jan 15 10:31:00 2024
Install Reason  : Installed as a dependency for another package
"""


@pytest.fixture
def mock_pacman_sl_output() -> str:
    """Sample ``pacman -Sl`` output for testing."""
    return """core gtk3-dummy 1.0-1
extra firefox 128.0-1 [installed]
extra python-setuptools 1:69.0.3-1 [installed]
extra go 2:1.22.0-1 [installed: 2:1.21.0-1]
extra gtk3 1:3.24.41-1 [installed]
extra nautilus 46.0-1"""


@pytest.fixture
def mock_empty_output() -> str:
    """Empty output for testing edge cases."""
    return ""


@pytest.fixture
def sample_records() -> list[PackageRecord]:
    """Orphan records in descending size order."""
    installed = datetime(2024, 1, 15, 10, 30, tzinfo=UTC)
    return [
        PackageRecord(
            name="go",
            version="2:1.22.0-1",
            size_bytes=231_211_008,
            repo="extra",
            install_time=installed,
        ),
        PackageRecord(
            name="python-setuptools",
            version="1:69.0.3-1",
            size_bytes=6_773_801,
            repo="extra",
            install_time=installed,
        ),
        PackageRecord(
            name="libfoo",
            version="1.0-1",
            size_bytes=1024,
            repo="unknown",
            install_time=installed,
        ),
    ]


@pytest.fixture
def installed_packages() -> list[InstalledPackage]:
    """Installed packages with three orphans among them."""
    return [
        InstalledPackage(
            name="firefox",
            version="128.0-1",
            reason=InstallReason.EXPLICIT,
            size_bytes=257_236_992,
            repo="extra",
        ),
        InstalledPackage(
            name="gtk3",
            version="1:3.24.41-1",
            reason=InstallReason.DEPENDENCY,
            required_by=frozenset({"firefox"}),
            size_bytes=56_727_552,
            repo="extra",
        ),
        InstalledPackage(
            name="python-setuptools",
            version="1:69.0.3-1",
            reason=InstallReason.DEPENDENCY,
            size_bytes=6_773_801,
            repo="extra",
        ),
        InstalledPackage(
            name="go",
            version="2:1.22.0-1",
            reason=InstallReason.DEPENDENCY,
            size_bytes=231_211_008,
            repo="extra",
        ),
        InstalledPackage(
            name="libfoo",
            version="1.0-1",
            reason=InstallReason.DEPENDENCY,
            size_bytes=1024,
        ),
    ]


@pytest.fixture
def mock_system(installed_packages: list[InstalledPackage]) -> Iterator[SimpleNamespace]:
    """Patch the CLI pipeline so commands run without pacman.

    Tests may replace ``mock_system.config`` or the scan side effect
    before invoking a command.
    """
    system = SimpleNamespace(scanner=MagicMock(), operator=MagicMock(), config=DudeConfig())
    system.scanner.scan.side_effect = lambda: iter(installed_packages)
    system.operator.command_for.side_effect = lambda names, nosave=False: [
        "sudo",
        "pacman",
        "-Rns" if nosave else "-Rs",
        *names,
    ]
    system.operator.remove.side_effect = lambda names, nosave=False: RemovalResult(
        success=True,
        command=tuple(system.operator.command_for(names, nosave=nosave)),
    )

    with (
        patch("dude.cli.common.PacmanScanner", return_value=system.scanner),
        patch("dude.cli.common.PacmanOperator", return_value=system.operator),
        patch("dude.cli.common.load_config", side_effect=lambda: system.config),
    ):
        yield system
