"""Fixed OOXML package scaffolding around the rendered document body."""

from datetime import datetime, timezone

from notepad_export.converter.ooxml import build_document_xml, escape_xml
from notepad_export.model.package import NoteMetadata, PackagePart

APPLICATION_NAME = "ChatOS Notepad"

CONTENT_TYPES_PART = "[Content_Types].xml"
ROOT_RELS_PART = "_rels/.rels"
CORE_PROPS_PART = "docProps/core.xml"
APP_PROPS_PART = "docProps/app.xml"
DOCUMENT_PART = "word/document.xml"
DOCUMENT_RELS_PART = "word/_rels/document.xml.rels"

_XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n'

_CONTENT_TYPES = (
    _XML_DECLARATION
    + '<Types xmlns="http://schemas.openxmlformats.org/package/2006/content-types">\n'
    '  <Default Extension="rels" ContentType="application/vnd.openxmlformats-package.relationships+xml"/>\n'
    '  <Default Extension="xml" ContentType="application/xml"/>\n'
    '  <Override PartName="/word/document.xml" ContentType="application/vnd.openxmlformats-officedocument.wordprocessingml.document.main+xml"/>\n'
    '  <Override PartName="/docProps/core.xml" ContentType="application/vnd.openxmlformats-package.core-properties+xml"/>\n'
    '  <Override PartName="/docProps/app.xml" ContentType="application/vnd.openxmlformats-officedocument.extended-properties+xml"/>\n'
    "</Types>"
)

_ROOT_RELS = (
    _XML_DECLARATION
    + '<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">\n'
    '  <Relationship Id="rId1" Type="http://schemas.openxmlformats.org/officeDocument/2006/relationships/officeDocument" Target="word/document.xml"/>\n'
    '  <Relationship Id="rId2" Type="http://schemas.openxmlformats.org/package/2006/relationships/metadata/core-properties" Target="docProps/core.xml"/>\n'
    '  <Relationship Id="rId3" Type="http://schemas.openxmlformats.org/officeDocument/2006/relationships/extended-properties" Target="docProps/app.xml"/>\n'
    "</Relationships>"
)

_CORE_PROPS = (
    _XML_DECLARATION
    + '<cp:coreProperties xmlns:cp="http://schemas.openxmlformats.org/package/2006/metadata/core-properties"\n'
    '  xmlns:dc="http://purl.org/dc/elements/1.1/"\n'
    '  xmlns:dcterms="http://purl.org/dc/terms/"\n'
    '  xmlns:dcmitype="http://purl.org/dc/dcmitype/"\n'
    '  xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance">\n'
    "  <dc:title>{title}</dc:title>\n"
    "  <dc:creator>{application}</dc:creator>\n"
    "  <cp:lastModifiedBy>{application}</cp:lastModifiedBy>\n"
    '  <dcterms:created xsi:type="dcterms:W3CDTF">{stamp}</dcterms:created>\n'
    '  <dcterms:modified xsi:type="dcterms:W3CDTF">{stamp}</dcterms:modified>\n'
    "</cp:coreProperties>"
)

_APP_PROPS = (
    _XML_DECLARATION
    + '<Properties xmlns="http://schemas.openxmlformats.org/officeDocument/2006/extended-properties"\n'
    '  xmlns:vt="http://schemas.openxmlformats.org/officeDocument/2006/docPropsVTypes">\n'
    "  <Application>{application}</Application>\n"
    "</Properties>"
)

_DOCUMENT_RELS = (
    _XML_DECLARATION
    + '<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships"></Relationships>'
)


def iso_timestamp(timestamp: datetime) -> str:
    """Format a timestamp as W3CDTF in UTC, e.g. ``2024-03-01T09:30:00Z``.

    Naive datetimes are taken to be UTC already.
    """
    if timestamp.tzinfo is not None:
        timestamp = timestamp.astimezone(timezone.utc).replace(tzinfo=None)
    return timestamp.isoformat(timespec="seconds") + "Z"


def build_package_parts(content: str | None, metadata: NoteMetadata) -> list[PackagePart]:
    """Build the six parts of a minimal WordprocessingML package.

    A missing ``metadata.timestamp`` means the current local time.
    """
    timestamp = metadata.timestamp or datetime.now().astimezone()
    stamp = iso_timestamp(timestamp)
    application = escape_xml(APPLICATION_NAME)
    core_props = _CORE_PROPS.format(
        title=escape_xml(metadata.title),
        application=application,
        stamp=stamp,
    )
    app_props = _APP_PROPS.format(application=application)

    return [
        PackagePart(CONTENT_TYPES_PART, _CONTENT_TYPES.encode("utf-8")),
        PackagePart(ROOT_RELS_PART, _ROOT_RELS.encode("utf-8")),
        PackagePart(CORE_PROPS_PART, core_props.encode("utf-8")),
        PackagePart(APP_PROPS_PART, app_props.encode("utf-8")),
        PackagePart(DOCUMENT_PART, build_document_xml(content).encode("utf-8")),
        PackagePart(DOCUMENT_RELS_PART, _DOCUMENT_RELS.encode("utf-8")),
    ]
