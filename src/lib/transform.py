"""
Markdown transform pipeline: parse -> process -> compile

pipeline_init() builds one markdown engine, one Environment and three stage
functions closing over both:

    parse(text) -> tokens          engine parse, title and heading extraction
    await process(tokens) -> tokens  plugin processors, strictly in order
    compile(tokens) -> html        render (plus deferred term tokens), sanitize

The Environment is returned as well so callers can read title, headings, meta
and assets after a run. It belongs to that one pipeline: runs on the same
pipeline must not overlap, and concurrent work should build one pipeline per
run (transform() does exactly that).

Example:
    >>> parse, process, compile, env = pipeline_init(TransformOptions(extract_title=True))
    >>> tokens = parse("# Hello\\n\\nWorld")
    >>> env.title
    'Hello'
"""

from dataclasses import dataclass, replace
from typing import Any, Awaitable, Callable, Dict, List, NamedTuple, Optional, Tuple

from markdown_it import MarkdownIt
from markdown_it.token import Token

from ..models.environment import Environment
from ..models.options import TransformOptions
from ..models.parser import Heading
from ..models.plugins import PluginOptions, PluginSpec, ProcessorFn
from .headings import headings_get
from .highlight import highlight_make
from .log import LOG
from .plugins import DEFAULT_PLUGINS, attrsPlugin_make
from .sanitize import html_sanitize
from .stream import stream_validate
from .title import title_extract, title_render


ParseFn = Callable[[str], List[Token]]
ProcessFn = Callable[[List[Token]], Awaitable[List[Token]]]
CompileFn = Callable[[List[Token]], str]


class TransformPipeline(NamedTuple):
    """The three stage functions and their shared Environment"""
    parse: ParseFn
    process: ProcessFn
    compile: CompileFn
    env: Environment


@dataclass
class TransformResult:
    """
    Output of a complete transform() run

    Attributes:
        html: Compiled HTML
        title: Derived title ("" unless title extraction was requested)
        headings: Heading descriptors
        meta: Front matter metadata
        assets: Local asset references
    """
    html: str
    title: str
    headings: List[Heading]
    meta: Dict[str, Any]
    assets: List[Dict[str, Any]]


def plugins_resolve(options: TransformOptions) -> Tuple[PluginSpec, ...]:
    """Configured plugins, or the built-in set"""
    return options.plugins if options.plugins is not None else DEFAULT_PLUGINS


def pluginOptions_compose(options: TransformOptions) -> PluginOptions:
    """Options every plugin receives: custom keys plus the explicit fields"""
    return PluginOptions(
        conditions_in_code=options.conditions_in_code,
        vars=dict(options.vars),
        path=options.path,
        extract_title=options.extract_title,
        title_extractor=options.title_extractor or title_extract,
        disable_liquid=options.disable_liquid,
        log=LOG,
        custom=options.custom,
    )


def plugins_init(md: MarkdownIt, options: TransformOptions) -> None:
    """
    Apply the attribute plugin, then every configured plugin, to the engine

    The attribute plugin comes first unconditionally: heading ids and other
    plugins rely on attributes already being attached. Configured plugins keep
    their order. The custom link-detection TLD list is installed last and only
    when link detection is enabled.
    """
    plugin_options = pluginOptions_compose(options)
    specs = (attrsPlugin_make(options.left_delimiter, options.right_delimiter),) + plugins_resolve(options)

    for spec in specs:
        if spec.apply is None:
            continue
        LOG(f"Applying plugin '{spec.name}'", level=3)
        md.use(spec.apply, replace(plugin_options, config=dict(spec.config)))

    if options.linkify and options.linkify_tlds:
        md.linkify.tlds(list(options.linkify_tlds), True)


def parser_init(md: MarkdownIt, options: TransformOptions, env: Environment) -> ParseFn:
    """Create the parse stage"""
    extract = options.title_extractor or title_extract

    def parse(text: str) -> List[Token]:
        env.reset()
        tokens = md.parse(text, env)

        if options.extract_title:
            extraction = extract(tokens)
            tokens = extraction.tokens
            env.title = title_render(extraction, md, env)

        # Recomputed on the current tokens without removing anything; when
        # extract_title also ran, this overwrites its title.
        if options.need_title:
            env.title = title_render(extract(tokens), md, env)

        env.headings = headings_get(tokens, options.need_flat_list_headings)

        LOG(f"Parsed {len(tokens)} tokens, {len(env.headings)} headings", level=2)
        return tokens

    return parse


def processor_init(md: MarkdownIt, options: TransformOptions, env: Environment) -> ProcessFn:
    """Create the process stage from the plugins exposing a processor"""
    processors: Tuple[Tuple[str, ProcessorFn], ...] = tuple(
        (spec.name, spec.process)
        for spec in plugins_resolve(options)
        if spec.has_processor
    )

    async def process(tokens: List[Token]) -> List[Token]:
        for name, processor in processors:
            LOG(f"Running processor '{name}'", level=3)
            tokens = await processor(tokens, md, env)
            stream_validate(tokens, name)
        return tokens

    return process


def compiler_init(md: MarkdownIt, options: TransformOptions, env: Environment) -> CompileFn:
    """Create the compile stage"""

    def compile(tokens: List[Token]) -> str:
        term_tokens = env.termTokens_consume()

        html = md.renderer.render([*tokens, *term_tokens], md.options, env)

        if options.need_to_sanitize_html:
            return html_sanitize(html, options.sanitize_options)
        return html

    return compile


def engine_make(options: TransformOptions) -> MarkdownIt:
    """Markdown engine configured from the transform options"""
    return MarkdownIt(
        "js-default",
        {
            "html": options.allow_html,
            "linkify": options.linkify,
            "breaks": options.breaks,
            "highlight": highlight_make(options.highlight_langs),
        },
    )


def pipeline_init(options: Optional[TransformOptions] = None) -> TransformPipeline:
    """
    Build a transform pipeline

    Args:
        options: Pipeline configuration (defaults when None)

    Returns:
        TransformPipeline(parse, process, compile, env), all sharing one engine
        and one Environment
    """
    options = options or TransformOptions()

    md = engine_make(options)
    env = Environment()

    plugins_init(md, options)

    parse = parser_init(md, options, env)
    process = processor_init(md, options, env)
    compile = compiler_init(md, options, env)

    return TransformPipeline(parse, process, compile, env)


async def transform(text: str, options: Optional[TransformOptions] = None) -> TransformResult:
    """
    Run a fresh pipeline over one document

    Args:
        text: Markdown source
        options: Pipeline configuration

    Returns:
        TransformResult with the HTML and everything the Environment collected
    """
    parse, process, compile, env = pipeline_init(options)

    tokens = await process(parse(text))
    html = compile(tokens)

    return TransformResult(
        html=html,
        title=env.title,
        headings=env.headings,
        meta=env.meta,
        assets=env.assets,
    )
