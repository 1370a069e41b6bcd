"""
JSX Element 樹：render / parse 單元測試
"""
import pytest
from figma_react.markup import Element, Expr, MarkupSyntaxError, parse, render


# ─── render ─────────────────────────────────────────────────────────────────

def test_render_empty_element():
    assert render(Element("div", {"className": "card"})) == '<div className="card"></div>'


def test_render_void_element():
    assert render(Element("img", {"src": "a.png", "alt": "A"})) == '<img src="a.png" alt="A" />'


def test_render_expression_attr_and_child():
    el = Element("button", {"onClick": Expr("onClick")}, [Expr("label")])
    assert render(el) == "<button onClick={onClick}>{label}</button>"


def test_render_boolean_attr():
    assert render(Element("input", {"disabled": None})) == "<input disabled />"


def test_render_nested_indentation():
    el = Element("div", {"className": "card"}, [
        Element("p", {}, [Expr("title")]),
        Element("div", {}, [Element("img", {"src": "x.png"})]),
    ])
    assert render(el) == (
        '<div className="card">\n'
        '  <p>{title}</p>\n'
        '  <div>\n'
        '    <img src="x.png" />\n'
        '  </div>\n'
        '</div>'
    )


def test_render_depth_indents_following_lines_only():
    el = Element("div", {}, [Element("p", {}, ["Hi"])])
    assert render(el, 2) == "<div>\n      <p>Hi</p>\n    </div>"


def test_render_escapes_special_text():
    assert render(Element("p", {}, ["Don't"])) == '<p>{"Don\'t"}</p>'
    assert render(Element("p", {}, ["a < b"])) == '<p>{"a < b"}</p>'


def test_render_escapes_quote_in_attr():
    assert render(Element("img", {"alt": 'say "hi"'})) == '<img alt={"say \\"hi\\""} />'


# ─── Element helpers ────────────────────────────────────────────────────────

def test_find_all_preorder():
    inner = Element("div", {"id": "inner"})
    outer = Element("div", {"id": "outer"}, [Element("p"), inner])
    assert outer.find_all("div") == [outer, inner]
    assert outer.contains("p")
    assert not outer.contains("button")


def test_copy_is_deep():
    original = Element("div", {"className": "a"}, [Element("p", {}, ["x"])])
    clone = original.copy()
    clone.attrs["className"] = "b"
    clone.children[0].tag = "h1"
    assert original.attrs["className"] == "a"
    assert original.children[0].tag == "p"


# ─── parse ──────────────────────────────────────────────────────────────────

def test_parse_attrs_and_children():
    root = parse('<div className="card" role="img" tabIndex={0}>Hello {name}</div>')
    assert root.tag == "div"
    assert root.attrs == {"className": "card", "role": "img", "tabIndex": Expr("0")}
    assert root.children == ["Hello", Expr("name")]
    assert isinstance(root.children[1], Expr)


def test_parse_expression_with_braces_in_string():
    root = parse('<div onKeyDown={(e) => e.key === "}" && go()}></div>')
    assert root.attrs["onKeyDown"] == '(e) => e.key === "}" && go()'


def test_parse_self_closing_and_nested():
    root = parse('<label htmlFor="x">\n  Email\n  <input id="x" disabled />\n</label>')
    assert root.children[0] == "Email"
    child = root.children[1]
    assert child.tag == "input"
    assert child.attrs == {"id": "x", "disabled": None}


def test_parse_render_preserves_generated_markup():
    markup = (
        '<div className="card">\n'
        '  <p className="text-base">{title}</p>\n'
        '  <img src="hero.png" className="" alt="Hero" />\n'
        '</div>'
    )
    assert render(parse(markup)) == markup


@pytest.mark.parametrize("bad", [
    "<div>",
    "<div></span>",
    "<div></div><div></div>",
    "plain text",
    "<div className=card></div>",
    "<div onClick={go></div>",
])
def test_parse_errors(bad):
    with pytest.raises(MarkupSyntaxError):
        parse(bad)


def test_markup_syntax_error_is_value_error():
    with pytest.raises(ValueError):
        parse("")
