"""Shared document fixtures for numbering tests."""

import pytest
from docx import Document
from docx.opc.constants import RELATIONSHIP_TYPE as RT
from docx.oxml import parse_xml
from docx.oxml.ns import nsdecls

from html_numbering.config import Config, NumberingConfig
from html_numbering.numbering.store import NumberingStore


def _numbering_element(doc):
    return doc.part.numbering_part.element


def _replace_numbering(doc, xml_children: str):
    element = _numbering_element(doc)
    for child in list(element):
        element.remove(child)
    if xml_children:
        seeded = parse_xml(f"<w:numbering {nsdecls('w')}>{xml_children}</w:numbering>")
        for child in list(seeded):
            element.append(child)
    return doc


@pytest.fixture
def config():
    return Config.default()


@pytest.fixture
def numbering_config():
    return NumberingConfig()


@pytest.fixture
def blank_document():
    """A document whose numbering part exists but holds nothing."""
    return _replace_numbering(Document(), "")


@pytest.fixture
def document_without_numbering():
    """A document with no numbering part at all."""
    doc = Document()
    for rId, rel in list(doc.part.rels.items()):
        if rel.reltype == RT.NUMBERING:
            doc.part.drop_rel(rId)
    return doc


@pytest.fixture
def seeded_document():
    """Definitions 3 and 5 and instances 1 -> 3 and 4 -> 5, as another tool left them."""
    return _replace_numbering(
        Document(),
        '<w:abstractNum w:abstractNumId="3">'
        '<w:multiLevelType w:val="singleLevel"/>'
        '<w:lvl w:ilvl="0"><w:start w:val="1"/><w:numFmt w:val="decimal"/>'
        '<w:lvlText w:val="%1)"/></w:lvl>'
        "</w:abstractNum>"
        '<w:abstractNum w:abstractNumId="5">'
        '<w:multiLevelType w:val="singleLevel"/>'
        '<w:lvl w:ilvl="0"><w:numFmt w:val="bullet"/><w:lvlText w:val="-"/></w:lvl>'
        "</w:abstractNum>"
        '<w:num w:numId="1"><w:abstractNumId w:val="3"/></w:num>'
        '<w:num w:numId="4"><w:abstractNumId w:val="5"/></w:num>',
    )


@pytest.fixture
def blank_store(blank_document):
    return NumberingStore.from_document(blank_document)


@pytest.fixture
def seeded_store(seeded_document):
    return NumberingStore.from_document(seeded_document)
