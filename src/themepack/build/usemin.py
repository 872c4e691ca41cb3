"""
Optimization blocks.

Templates group raw asset tags between HTML comments:

    <!-- build:js js/app.min.js -->
    <script src="<?php printf(get_template_directory_uri()); ?>/js/a.js"></script>
    <script src="js/b.js"></script>
    <!-- endbuild -->

prepare() turns every block into per-step file configurations (concat, then
uglify or cssmin), and rewrite() later replaces the block with a single tag
pointing at the fingerprinted bundle.

Asset paths in the templates may carry the theme-URI placeholder, which only
means something once WordPress renders the template. The concat step strips
it so the build works on real filesystem paths.
"""

import logging
import posixpath
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional

from . import plugins
from .exceptions import BlockParseError
from .files import join_path

logger = logging.getLogger(__name__)

PLACEHOLDER = "<?php printf(get_template_directory_uri()); ?>"

BLOCK_START = re.compile(r'<!--\s*build:(\w+)(?:\(([^)]+)\))?\s*(.+?)\s*-->')
BLOCK_END = re.compile(r'<!--\s*endbuild\s*-->')
SOURCE_ATTRIBUTES = {
    'js': re.compile(r'src=[\'"]([^\'"]+)[\'"]'),
    'css': re.compile(r'href=[\'"]([^\'"]+)[\'"]'),
}
REFERENCE = re.compile(r'\b(src|href)=([\'"])([^\'"]+)\2')
TAG_TEMPLATES = {
    'js': '<script src="{ref}"></script>',
    'css': '<link rel="stylesheet" href="{ref}">',
}

DEFAULT_FLOW = {
    'js': ['concat', 'uglify'],
    'css': ['concat', 'cssmin'],
}


@dataclass
class Block:
    """One optimization block parsed from a template."""
    type: str
    dest: str
    search_path: Optional[str] = None
    src: List[str] = field(default_factory=list)
    raw: List[str] = field(default_factory=list)
    indent: str = ''


@dataclass
class FlowContext:
    """Inputs and outputs of one flow step for one block."""
    in_dir: str
    out_dir: str
    in_files: List[str]
    out_files: List[str] = field(default_factory=list)


@dataclass
class FileMapping:
    dest: str
    src: List[str]


@dataclass
class ConcatConfig:
    files: List[FileMapping] = field(default_factory=list)


@dataclass
class Preparation:
    """Result of scanning the templates: blocks per template, configs per step."""
    blocks: Dict[str, List[Block]] = field(default_factory=dict)
    steps: Dict[str, List[ConcatConfig]] = field(default_factory=dict)


def strip_placeholder(path: str, placeholder: str = PLACEHOLDER) -> str:
    """Remove the first occurrence of the placeholder; no-op when absent."""
    return re.sub(re.escape(placeholder), '', path, count=1)


def create_concat_config(context: FlowContext, block: Block, placeholder: str = PLACEHOLDER) -> ConcatConfig:
    """Build the concat configuration for a block.

    Strips the placeholder from the block destination (in place) and from
    every input file, so the concat tool sees paths under the build
    directories, and hands the destination on to the next step.
    """
    block.dest = strip_placeholder(block.dest, placeholder)
    files = FileMapping(dest=join_path(context.out_dir, block.dest), src=[])
    for f in context.in_files:
        files.src.append(join_path(context.in_dir, strip_placeholder(f, placeholder)))
    context.out_files = [block.dest]
    return ConcatConfig(files=[files])


def create_minify_config(context: FlowContext, block: Block, placeholder: str = PLACEHOLDER) -> ConcatConfig:
    """One-to-one configuration: each input file is minified to the same relative path."""
    cfg = ConcatConfig()
    for f in context.in_files:
        cfg.files.append(FileMapping(dest=join_path(context.out_dir, f), src=[join_path(context.in_dir, f)]))
    context.out_files = list(context.in_files)
    return cfg


CONFIG_WRITERS: Dict[str, Callable[..., ConcatConfig]] = {
    'concat': create_concat_config,
    'uglify': create_minify_config,
    'cssmin': create_minify_config,
}


def _linefeed(content: str) -> str:
    return '\r\n' if '\r\n' in content else '\n'


def parse_blocks(content: str, template: str = None) -> List[Block]:
    """Parse the optimization blocks of a template, in document order."""
    blocks = []
    current = None
    start_line = None
    for number, line in enumerate(content.split(_linefeed(content)), start=1):
        start = BLOCK_START.search(line)
        if start:
            if current is not None:
                raise BlockParseError("nested build block", template=template, line=number)
            block_type, search_path, dest = start.groups()
            if block_type not in SOURCE_ATTRIBUTES:
                raise BlockParseError(f"unsupported block type '{block_type}'", template=template, line=number)
            current = Block(
                type=block_type,
                dest=dest,
                search_path=search_path,
                indent=line[:len(line) - len(line.lstrip())],
            )
            start_line = number

        if current is None:
            continue

        current.raw.append(line)
        # tags may share a line with the block comments
        segment = line[start.end():] if start else line
        end = BLOCK_END.search(segment)
        if end:
            segment = segment[:end.start()]
        for ref in SOURCE_ATTRIBUTES[current.type].finditer(segment):
            current.src.append(ref.group(1))

        if end:
            blocks.append(current)
            current = None

    if current is not None:
        raise BlockParseError("build block is never closed", template=template, line=start_line)
    return blocks


def prepare(templates: List[Path], root: str, dest: str, staging: str,
            flow: Dict[str, List[str]] = None, placeholder: str = PLACEHOLDER) -> Preparation:
    """Scan templates for blocks and build each step's file configurations.

    The first step of a block reads from root (or the block's search path
    under root), intermediate steps write under staging/<step>, and the last
    step writes into dest.
    """
    flow = flow or DEFAULT_FLOW
    result = Preparation()
    destinations = {}

    for template in templates:
        template = Path(template)
        blocks = parse_blocks(template.read_text(encoding='utf-8'), template=str(template))
        result.blocks[str(template)] = blocks

        for block in blocks:
            target = posixpath.normpath(strip_placeholder(block.dest, placeholder).lstrip('/'))
            if target in destinations:
                raise BlockParseError(
                    f"destination '{target}' already used in {destinations[target]}",
                    template=str(template),
                )
            destinations[target] = str(template)

            in_dir = join_path(root, block.search_path) if block.search_path else root
            context = FlowContext(in_dir=in_dir, out_dir='', in_files=list(block.src))
            steps = flow[block.type]
            for index, step in enumerate(steps):
                last = index == len(steps) - 1
                context.out_dir = dest if last else join_path(staging, step)
                cfg = CONFIG_WRITERS[step](context, block, placeholder)
                result.steps.setdefault(step, []).append(cfg)
                context = FlowContext(in_dir=context.out_dir, out_dir='', in_files=context.out_files)

            logger.debug(f"Block {block.type}:{block.dest} in {template} with {len(block.src)} sources")

    return result


def run_step(step: str, configs: List[ConcatConfig], separator: str = '\n') -> List[Path]:
    """Hand a step's configurations to its tool."""
    written = []
    for cfg in configs:
        for mapping in cfg.files:
            if step == 'concat':
                written.append(plugins.concat(mapping.src, mapping.dest, separator))
            elif step == 'uglify':
                written.append(plugins.uglify(mapping.src[0], mapping.dest))
            elif step == 'cssmin':
                written.append(plugins.cssmin(mapping.src[0], mapping.dest))
            else:
                raise ValueError(f"Unknown optimization step '{step}'")
    return written


def rewrite_references(content: str, root: str, revisions: Dict[str, str],
                       placeholder: str = PLACEHOLDER) -> str:
    """Point src/href attributes at the fingerprinted name of any revved file.

    Only the file name changes, so a placeholder or leading slash in the
    reference is kept as written.
    """
    def replace(match):
        attribute, quote, ref = match.groups()
        revved = revisions.get(join_path(root, strip_placeholder(ref, placeholder)))
        if revved is None:
            return match.group(0)
        old_name = posixpath.basename(ref)
        return f"{attribute}={quote}{ref[:len(ref) - len(old_name)]}{posixpath.basename(revved)}{quote}"

    return REFERENCE.sub(replace, content)


def rewrite(content: str, blocks: List[Block], root: str, revisions: Dict[str, str] = None,
            placeholder: str = PLACEHOLDER) -> str:
    """Replace every block with one tag referencing its (fingerprinted) bundle,
    then update the remaining references to revved files."""
    revisions = revisions or {}
    linefeed = _linefeed(content)
    for block in blocks:
        target = join_path(root, block.dest)
        revved = revisions.get(target, target)
        ref = posixpath.relpath(revved, posixpath.normpath(root))
        tag = block.indent + TAG_TEMPLATES[block.type].format(ref=ref)
        content = content.replace(linefeed.join(block.raw), tag, 1)
    return rewrite_references(content, root, revisions, placeholder)


def rewrite_template(template: Path, blocks: List[Block], root: str, revisions: Dict[str, str] = None,
                     placeholder: str = PLACEHOLDER) -> Path:
    template = Path(template)
    content = template.read_text(encoding='utf-8')
    template.write_text(rewrite(content, blocks, root, revisions, placeholder), encoding='utf-8')
    return template
