"""Checks that the env example and declared dependencies cover what the code uses."""

import ast
import tomllib
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent
SOURCE_DIRS = ["core", "translation", "accounts", "stats", "support"]
SOURCE_MODULES = ["main.py", "supabase_client.py"]


def _source_files() -> list[Path]:
    files = [PROJECT_ROOT / name for name in SOURCE_MODULES]
    for directory in SOURCE_DIRS:
        files.extend((PROJECT_ROOT / directory).rglob("*.py"))
    return files


def _parse(path: Path) -> ast.AST:
    return ast.parse(path.read_text(encoding="utf-8"), filename=str(path))


def _env_keys_read(root: ast.AST) -> set[str]:
    """Collects literal names passed to os.getenv / _is_true."""
    keys = set()
    for node in ast.walk(root):
        if not isinstance(node, ast.Call) or not node.args:
            continue
        func = node.func
        name = func.attr if isinstance(func, ast.Attribute) else getattr(func, "id", None)
        first = node.args[0]
        if name in {"getenv", "_is_true"} and isinstance(first, ast.Constant):
            keys.add(first.value)
    return keys


def _example_keys() -> set[str]:
    keys = set()
    with open(PROJECT_ROOT / "config.env.example", "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith("#") and "=" in line:
                keys.add(line.split("=", 1)[0].strip())
    return keys


def test_env_example_lists_every_variable():
    used = set()
    for path in _source_files():
        used.update(_env_keys_read(_parse(path)))

    missing = used - _example_keys()
    assert not missing, f"Variables missing from config.env.example: {missing}"


def test_pyproject_declares_third_party_imports():
    with open(PROJECT_ROOT / "pyproject.toml", "rb") as f:
        project = tomllib.load(f)["project"]
    declared = {
        dep.split(">")[0].split("=")[0].split("<")[0].split("[")[0].strip().lower()
        for dep in project["dependencies"]
    }

    # import name -> distribution name
    known_mappings = {
        "fastapi": "fastapi",
        "starlette": "fastapi",
        "pydantic": "pydantic",
        "dotenv": "python-dotenv",
        "supabase": "supabase",
        "postgrest": "postgrest",
        "langchain_core": "langchain-core",
        "langchain_google_genai": "langchain-google-genai",
    }

    imports = set()
    for path in _source_files():
        for node in ast.walk(_parse(path)):
            if isinstance(node, ast.Import):
                imports.update(alias.name.split(".")[0] for alias in node.names)
            elif isinstance(node, ast.ImportFrom) and node.module and node.level == 0:
                imports.add(node.module.split(".")[0])

    missing = {
        known_mappings[name]
        for name in imports
        if name in known_mappings and known_mappings[name] not in declared
    }
    assert not missing, f"Dependencies missing from pyproject.toml: {missing}"
    assert "uvicorn" in declared
