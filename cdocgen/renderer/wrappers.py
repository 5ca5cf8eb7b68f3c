"""File header and line-group wrappers built on the comment renderer."""

from dataclasses import dataclass
from typing import List, Optional, Tuple, Union
import logging

from ..analyzer.statement_extractor import line_bounds
from ..models.declaration import Invalid, MemberLine
from ..models.render import Insertion, RenderConfig, RenderResult
from .comment_renderer import (
    CLOSE,
    OPEN,
    align_member_comments,
    render_group_end,
    render_group_start,
)

logger = logging.getLogger(__name__)

PARSER_ERROR = "parser error"


@dataclass(frozen=True)
class LineGroup:
    """A run of consecutive lines sharing the same first token."""
    token: str
    start: int  # offset of the first line start
    end: int    # offset of the last line end (newline excluded)
    lines: Tuple[MemberLine, ...] = ()


def render_file_header(
    file_name: str,
    config: RenderConfig,
    author: Optional[str] = None,
    date: Optional[str] = None
) -> str:
    """Render the whole-file header block.

    Args:
        file_name: Name written after the file tag
        config: Render configuration
        author: Author line, omitted when empty
        date: Date line, omitted when empty

    Returns:
        Comment text
    """
    lead = config.lead
    lines = [
        OPEN,
        f" * {lead}file {file_name}",
        f" * {lead}brief {config.default_text}",
    ]
    if author:
        lines.append(f" * {lead}author {author}")
    if date:
        lines.append(f" * {lead}date {date}")
    lines.append(CLOSE)
    return "\n".join(lines)


def _first_token(line: str) -> str:
    tokens = line.split()
    return tokens[0] if tokens else ""


def find_group(source: str, start_offset: int) -> Union[LineGroup, Invalid]:
    """Collect the lines that look like the line at ``start_offset``.

    The group continues while each following line has the same first token
    as the first line, and stops at the first differing or blank line.

    Args:
        source: Document text
        start_offset: Any offset on the first line of the group

    Returns:
        LineGroup, or Invalid("parser error") when the first line is empty
    """
    line_start, line_end = line_bounds(source, start_offset)
    token = _first_token(source[line_start:line_end])
    if not token:
        return Invalid(PARSER_ERROR)

    lines: List[MemberLine] = []
    group_end = line_end
    position = line_start
    while position <= len(source):
        current_start, current_end = line_bounds(source, position)
        line = source[current_start:current_end]
        if _first_token(line) != token:
            break
        width = len(line.rstrip())
        lines.append(MemberLine(end_offset=current_start + width, width=width))
        group_end = current_end
        if current_end >= len(source):
            break
        position = current_end + 1

    logger.debug(f"Group of {len(lines)} lines starting with '{token}'")
    return LineGroup(token=token, start=line_start, end=group_end, lines=tuple(lines))


def render_group(
    group: LineGroup,
    config: RenderConfig,
    full_mode: bool = False
) -> RenderResult:
    """Render the group delimiters (and member comments in full mode).

    The returned text is the group-start block; the group-end block and the
    member comments are returned as insertions.
    """
    insertions: List[Insertion] = []
    if full_mode:
        insertions.extend(align_member_comments(group.lines, config))
    insertions.append(Insertion(offset=group.end, text="\n" + render_group_end(config)))
    return RenderResult(text=render_group_start(config), insertions=insertions)
