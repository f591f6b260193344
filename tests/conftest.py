"""Shared fixtures for archmap tests."""

import os
from pathlib import Path

import pytest

from archmap.scanning.models import DirectoryStructure, FileInfo


def write_tree(root: Path, files: dict) -> Path:
    """Create ``files`` (relative path -> text) under ``root``."""
    for rel, content in files.items():
        p = root / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(content, encoding="utf-8")
    return root


def make_file(path: str, imports=(), exports=(), size: int = 100, category: str = "Libraries"):
    """Build a FileInfo directly, without touching the filesystem."""
    name = path.rsplit("/", 1)[-1]
    suffix = "." + name.rsplit(".", 1)[-1] if "." in name else ""
    return FileInfo(
        path=path,
        name=name,
        extension=suffix,
        size=size,
        category=category,
        imports=tuple(imports),
        exports=tuple(exports),
    )


def make_structure(files, subdirectories=()):
    """Root DirectoryStructure holding ``files`` directly."""
    return DirectoryStructure.build("root", ".", list(files), list(subdirectories))


SAMPLE_PROJECT = {
    "package.json": '{\n  "name": "web",\n  "dependencies": {"next": "14.0.0"}\n}\n',
    "next.config.js": "module.exports = { reactStrictMode: true }\n",
    "README.md": "# Web\n",
    ".gitignore": "node_modules\n",
    ".git/HEAD": "ref: refs/heads/main\n",
    "node_modules/react/index.js": "export const React = {}\n",
    "docs/guide.md": "# Guide\n",
    "src/app/page.tsx": (
        "import Header from '@/components/Header'\n"
        "import { cn } from '../lib/utils'\n"
        "import React from 'react'\n"
        "export const Page = () => null\n"
    ),
    "src/components/Header.tsx": "export function Header() { return null }\n",
    "src/lib/utils.ts": (
        "import { format } from './format'\n"
        "export const cn = (...xs) => format(xs)\n"
    ),
    "src/lib/format.ts": (
        "import { cn } from './utils'\n"
        "export function format(xs) { return xs.join(' ') }\n"
    ),
}


@pytest.fixture
def sample_project(tmp_path):
    """A small Next.js-style project with one import cycle in src/lib."""
    return write_tree(tmp_path / "web", SAMPLE_PROJECT)


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Keep user/project config files and ARCHMAP_* vars out of the test."""
    home = tmp_path / "home"
    home.mkdir()
    cwd = tmp_path / "cwd"
    cwd.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(cwd)
    for key in list(os.environ):
        if key.startswith("ARCHMAP_"):
            monkeypatch.delenv(key)
    return cwd


@pytest.fixture
def tree(tmp_path):
    """Factory writing a file tree under tmp_path and returning its root."""

    def _tree(files: dict, name: str = "project") -> Path:
        return write_tree(tmp_path / name, files)

    return _tree


@pytest.fixture
def file_info():
    return make_file


@pytest.fixture
def structure():
    return make_structure
