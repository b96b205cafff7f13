"""Parse raw XML documentation comments into structured sections."""

import re
import textwrap
import xml.etree.ElementTree as ET

from dotnetdocs.doc_comment import (
    CodeExample,
    DocComment,
    ExceptionDoc,
    ParamDoc,
    SeeAlso,
)
from dotnetdocs.errors import MalformedDocumentationError
from dotnetdocs.type_reference import TypeReference

PARA_BREAK = "\x00"
WS_RE = re.compile(r"[ \t\r\n]+")
MEMBER_CREF_PREFIXES = {"M", "P", "F", "E"}


def parse_doc_comment(xml_text: str) -> DocComment:
    """Parse a ``<member>`` element (or a bare fragment) into a DocComment.

    Raises MalformedDocumentationError when the text is not well-formed XML.
    """
    if not xml_text or not xml_text.strip():
        return DocComment.empty()

    source = xml_text.strip()
    if not source.startswith("<member"):
        source = f"<member>{source}</member>"
    try:
        root = ET.fromstring(source)
    except ET.ParseError as e:
        msg = f"Unparseable documentation comment: {e}"
        raise MalformedDocumentationError(msg) from e

    doc = DocComment()
    for el in root:
        tag = el.tag
        if tag == "summary":
            doc.summary = " ".join(_paragraphs(el))
        elif tag == "remarks":
            doc.remarks.extend(_paragraphs(el))
        elif tag == "param":
            doc.parameters.append(ParamDoc(el.get("name", ""), _flat_text(el)))
        elif tag == "typeparam":
            doc.type_parameters.append(ParamDoc(el.get("name", ""), _flat_text(el)))
        elif tag == "returns":
            doc.returns = _flat_text(el)
        elif tag == "value":
            doc.value = _flat_text(el)
        elif tag == "exception":
            cref = el.get("cref")
            if cref:
                doc.exceptions.append(
                    ExceptionDoc(TypeReference.parse(cref), _flat_text(el))
                )
        elif tag == "example":
            doc.examples.extend(_examples(el))
        elif tag == "seealso":
            doc.see_also.append(_see_also(el))
    return doc


def _flat_text(el: ET.Element) -> str:
    return " ".join(_paragraphs(el))


def _paragraphs(el: ET.Element) -> list[str]:
    raw = _inner(el)
    out = []
    for chunk in raw.split(PARA_BREAK):
        if chunk.startswith("```"):
            out.append(chunk.strip())
            continue
        if chunk.startswith("- "):
            lines = (WS_RE.sub(" ", ln).strip() for ln in chunk.splitlines())
            out.append("\n".join(lines))
            continue
        text = WS_RE.sub(" ", chunk).strip()
        if text:
            out.append(text)
    return out


def _inner(el: ET.Element) -> str:
    parts = [el.text or ""]
    for child in el:
        parts.append(_inline(child))
        parts.append(child.tail or "")
    return "".join(parts)


def _inline(el: ET.Element) -> str:
    """Render one inline element to Markdown-ish text."""
    tag = el.tag
    if tag == "see":
        if el.get("cref"):
            return _cref_token(el.get("cref", ""))
        if el.get("href"):
            label = _inner(el).strip() or el.get("href", "")
            return f"[{label}]({el.get('href')})"
        if el.get("langword"):
            return f"`{el.get('langword')}`"
    if tag in {"paramref", "typeparamref"}:
        return f"`{el.get('name', '')}`"
    if tag == "c":
        return f"`{_inner(el).strip()}`"
    if tag == "para":
        return f"{PARA_BREAK}{_inner(el)}{PARA_BREAK}"
    if tag == "code":
        lang = el.get("language") or ""
        return f"{PARA_BREAK}```{lang}\n{_dedent(el.text or '')}\n```{PARA_BREAK}"
    if tag == "list":
        items = [WS_RE.sub(" ", _inner(i)).strip() for i in el.iter("item")]
        return PARA_BREAK + "\n".join(f"- {i}" for i in items if i) + PARA_BREAK
    return _inner(el)


def _cref_token(cref: str) -> str:
    """Turn a cref into an xref token; member crefs link to their declaring type."""
    prefix, sep, body = cref.partition(":")
    if not (sep and len(prefix) == 1):
        prefix, body = "T", cref
    if prefix in MEMBER_CREF_PREFIXES:
        type_uid, _, member = body.split("(")[0].rpartition(".")
        type_ref = TypeReference.parse(type_uid)
        member = member.split("``")[0]
        if member == "#ctor":
            member = type_ref.name
        return f"[{member}](xref:{type_ref.lookup_key})"
    return f"<xref:{TypeReference.parse(body).lookup_key}>"


def _dedent(code: str) -> str:
    return textwrap.dedent(code).strip("\n").rstrip()


def _examples(el: ET.Element) -> list[CodeExample]:
    blocks = [
        CodeExample(code=_dedent(c.text or ""), language=c.get("language"))
        for c in el.iter("code")
    ]
    if blocks:
        return blocks
    text = _dedent(el.text or "")
    return [CodeExample(code=text)] if text else []


def _see_also(el: ET.Element) -> SeeAlso:
    text = WS_RE.sub(" ", _inner(el)).strip()
    cref = el.get("cref")
    if cref:
        return SeeAlso(reference=TypeReference.parse(cref), text=text)
    return SeeAlso(url=el.get("href"), text=text)
