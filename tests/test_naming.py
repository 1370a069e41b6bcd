"""
命名工具單元測試
"""
import pytest
from figma_react.naming import preview_tree, to_component_name, to_kebab, to_prop_name


@pytest.mark.parametrize("raw,expected", [
    ("submit button", "SubmitButton"),
    ("Card/Header", "CardHeader"),
    ("primary-btn_large", "PrimaryBtnLarge"),
    ("ICON", "ICON"),
    ("SubmitButton", "SubmitButton"),
    ("email input", "EmailInput"),
    ("EmailInput", "EmailInput"),
    ("iconButton", "IconButton"),
    ("2 Column Grid", "Component2ColumnGrid"),
    ("", "Unnamed"),
    ("!!!", "Unnamed"),
    (None, "Unnamed"),
])
def test_to_component_name(raw, expected):
    assert to_component_name(raw) == expected


@pytest.mark.parametrize("raw,expected", [
    ("Card Title", "cardTitle"),
    ("Title", "title"),
    ("button-label", "buttonLabel"),
    ("1st Line", "stLine"),
    ("123", ""),
    ("", ""),
    ("Default", "defaultText"),
    ("class", "classText"),
    ("New", "newText"),
    ("2 delete", "deleteText"),
    ("Default Label", "defaultLabel"),
])
def test_to_prop_name(raw, expected):
    assert to_prop_name(raw) == expected


@pytest.mark.parametrize("raw,expected", [
    ("Submit Button", "submit-button"),
    ("Card / Header", "card-header"),
    ("  --Hero--  ", "hero"),
    ("", "unnamed"),
    (None, "unnamed"),
])
def test_to_kebab(raw, expected):
    assert to_kebab(raw) == expected


def test_preview_tree_shows_roles():
    tree = {
        "type": "FRAME",
        "name": "Card Container",
        "children": [
            {"type": "TEXT", "name": "Title", "characters": "Hi"},
            {"type": "FRAME", "name": "Submit Button"},
        ],
    }
    lines = preview_tree(tree).splitlines()
    assert lines[0] == "├─ Card Container  [FRAME]  <container>"
    assert lines[1] == "  ├─ Title  [TEXT]"
    assert lines[2] == "  ├─ Submit Button  [FRAME]  <button>"
