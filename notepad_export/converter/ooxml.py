"""OOXML (WordprocessingML) renderer for parsed Markdown blocks.

Converts Block objects into ``w:p`` fragments and assembles the
``word/document.xml`` part.  All functions are pure; the same block
always yields the same markup.
"""

import logging

from notepad_export.model.block import (
    Block,
    BlockquoteBlock,
    CodeBlock,
    HeadingBlock,
    OrderedListBlock,
    ParagraphBlock,
    UnorderedListBlock,
)
from notepad_export.model.run import Run, RunStyle
from notepad_export.parser.blocks import parse_blocks
from notepad_export.parser.inline import MONO_FONT, tokenize

logger = logging.getLogger(__name__)

# Font sizes in half-points for heading levels 1..6
HEADING_SIZES: tuple[int, ...] = (32, 28, 24, 22, 20, 18)
HEADING_SPACING_AFTER = 120

QUOTE_COLOR = "666666"
CODE_SHADING = "EFEFEF"
CODE_FONT_SIZE = 20

# Indents in twips
BLOCK_INDENT = 720
LIST_INDENT = 720
LIST_HANGING = 360

PAGE_WIDTH = 12240
PAGE_HEIGHT = 15840
PAGE_MARGIN = 1440
HEADER_FOOTER_MARGIN = 720

BULLET_PREFIX = "• "

LINE_BREAK = "<w:r><w:br/></w:r>"
EMPTY_RUN = '<w:r><w:t xml:space="preserve"></w:t></w:r>'

WORDPROCESSINGML_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"

_XML_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&apos;",
}
# Characters XML 1.0 does not allow anywhere in a document
_XML_INVALID_CHARS = [
    *range(0x00, 0x09),
    0x0B,
    0x0C,
    *range(0x0E, 0x20),
    0xFFFE,
    0xFFFF,
]
_XML_ESCAPE_TABLE = str.maketrans(
    {**_XML_ESCAPES, **dict.fromkeys(_XML_INVALID_CHARS)}
)


def escape_xml(value: str | None) -> str:
    """Escape the five XML special characters; None becomes ''.

    Control characters that XML 1.0 forbids are dropped in the same pass.
    """
    if value is None:
        return ""
    return str(value).translate(_XML_ESCAPE_TABLE)


def run_properties(style: RunStyle) -> str:
    """Build the ``w:rPr`` element for a style, or '' when nothing is set."""
    props: list[str] = []
    if style.bold:
        props.append("<w:b/>")
    if style.italic:
        props.append("<w:i/>")
    if style.underline:
        props.append('<w:u w:val="single"/>')
    if style.color:
        props.append(f'<w:color w:val="{style.color}"/>')
    if style.font:
        props.append(
            f'<w:rFonts w:ascii="{style.font}" w:hAnsi="{style.font}" w:cs="{style.font}"/>'
        )
    if style.size:
        props.append(f'<w:sz w:val="{style.size}"/>')
    if not props:
        return ""
    return f"<w:rPr>{''.join(props)}</w:rPr>"


def render_run(run: Run, base_style: RunStyle | None = None) -> str:
    """Serialize one run; empty text produces no markup."""
    if not run.text:
        return ""
    style = (base_style or RunStyle()).merge(run.style)
    # Escape the text only after the properties are composed.
    return f'<w:r>{run_properties(style)}<w:t xml:space="preserve">{escape_xml(run.text)}</w:t></w:r>'


def render_inline(text: str, base_style: RunStyle | None = None) -> str:
    """Tokenize a line of Markdown and serialize its runs."""
    return "".join(render_run(run, base_style) for run in tokenize(text))


def render_lines(
    lines: tuple[str, ...] | list[str],
    base_style: RunStyle | None = None,
    code: bool = False,
) -> str:
    """Render lines as runs separated by explicit line breaks.

    Code lines are not tokenized; a blank code line becomes a single
    space so the line still takes up vertical room.
    """
    parts: list[str] = []
    for index, line in enumerate(lines):
        text = line or ""
        if code:
            code_style = (base_style or RunStyle()).merge(RunStyle(font=MONO_FONT))
            parts.append(render_run(Run(text or " "), code_style))
        else:
            parts.append(render_inline(text, base_style))
        if index < len(lines) - 1:
            parts.append(LINE_BREAK)
    return "".join(parts)


def render_paragraph(
    runs: str,
    indent: int = 0,
    hanging: int = 0,
    spacing_before: int = 0,
    spacing_after: int = 0,
    shading: str = "",
) -> str:
    """Wrap serialized runs in a ``w:p`` with optional paragraph properties."""
    ppr_parts: list[str] = []
    if indent:
        hanging_attr = f' w:hanging="{hanging}"' if hanging else ""
        ppr_parts.append(f'<w:ind w:left="{indent}"{hanging_attr}/>')
    if spacing_before or spacing_after:
        before_attr = f' w:before="{spacing_before}"' if spacing_before else ""
        after_attr = f' w:after="{spacing_after}"' if spacing_after else ""
        ppr_parts.append(f"<w:spacing{before_attr}{after_attr}/>")
    if shading:
        ppr_parts.append(f'<w:shd w:val="clear" w:color="auto" w:fill="{shading}"/>')
    ppr = f"<w:pPr>{''.join(ppr_parts)}</w:pPr>" if ppr_parts else ""
    return f"<w:p>{ppr}{runs or EMPTY_RUN}</w:p>"


def heading_size(level: int) -> int:
    """Font size (half-points) for a heading level, clamped to 1..6."""
    return HEADING_SIZES[min(6, max(1, level)) - 1]


def render_block(block: Block) -> str:
    """Render a single block to WordprocessingML."""
    if isinstance(block, HeadingBlock):
        style = RunStyle(bold=True, size=heading_size(block.level))
        return render_paragraph(
            render_lines([block.text], style),
            spacing_after=HEADING_SPACING_AFTER,
        )
    elif isinstance(block, BlockquoteBlock):
        style = RunStyle(italic=True, color=QUOTE_COLOR)
        return render_paragraph(render_lines([block.text], style), indent=BLOCK_INDENT)
    elif isinstance(block, CodeBlock):
        style = RunStyle(font=MONO_FONT, size=CODE_FONT_SIZE)
        return render_paragraph(
            render_lines(block.lines or ("",), style, code=True),
            indent=BLOCK_INDENT,
            shading=CODE_SHADING,
        )
    elif isinstance(block, UnorderedListBlock):
        return "".join(_render_list_item(BULLET_PREFIX, item) for item in block.items)
    elif isinstance(block, OrderedListBlock):
        return "".join(
            _render_list_item(f"{index}. ", item)
            for index, item in enumerate(block.items, start=1)
        )
    elif isinstance(block, ParagraphBlock):
        return render_paragraph(render_lines(block.lines or ("",)))
    logger.debug("Skipping unknown block type %s", type(block).__name__)
    return ""


def _render_list_item(prefix: str, text: str) -> str:
    runs = render_run(Run(prefix)) + render_inline(text)
    return render_paragraph(runs, indent=LIST_INDENT, hanging=LIST_HANGING)


def render_body(blocks: list[Block]) -> str:
    """Render all blocks; an empty document still gets one paragraph."""
    if not blocks:
        return render_paragraph(render_lines([""]))
    return "".join(render_block(block) for block in blocks)


def build_document_xml(content: str | None) -> str:
    """Build the ``word/document.xml`` part for Markdown content."""
    blocks = parse_blocks(content)
    logger.debug("Parsed %d block(s)", len(blocks))
    body = render_body(blocks)
    return (
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n'
        f'<w:document xmlns:w="{WORDPROCESSINGML_NS}">\n'
        "  <w:body>\n"
        f"    {body}\n"
        "    <w:sectPr>\n"
        f'      <w:pgSz w:w="{PAGE_WIDTH}" w:h="{PAGE_HEIGHT}"/>\n'
        f'      <w:pgMar w:top="{PAGE_MARGIN}" w:right="{PAGE_MARGIN}"'
        f' w:bottom="{PAGE_MARGIN}" w:left="{PAGE_MARGIN}"'
        f' w:header="{HEADER_FOOTER_MARGIN}" w:footer="{HEADER_FOOTER_MARGIN}"'
        ' w:gutter="0"/>\n'
        "    </w:sectPr>\n"
        "  </w:body>\n"
        "</w:document>"
    )
