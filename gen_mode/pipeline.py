"""Generation pipeline: Load -> Build -> Render -> Emit."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from .emitter import emit, format_source, resolve_output_path
from .loader import Source, load_documents, source_name
from .logging import get_logger
from .model import ModeModel, build_model
from .renderer import RenderContext, render

logger = get_logger(__name__)


@dataclass
class GenerationResult:
    """Outcome of one generation run."""

    model: ModeModel
    source: str
    output: Path
    written: bool


def generate(
    sources: Sequence[Source],
    package: str = "main",
    path: Optional[str] = None,
    output: Optional[str] = None,
    target: str = "python",
    env_var: str = "MODE",
    dry_run: bool = False,
) -> GenerationResult:
    """Run the whole pipeline once.

    Any ``GenModeError`` aborts the run before anything is written. With
    ``dry_run`` the formatted source is returned but not written.
    """
    names = [source_name(source) for source in sources]
    logger.info("Generating modes", sources=names, target=target, package=package)

    document = load_documents(sources)
    model = build_model(document)

    context = RenderContext(package=package, sources=names, env_var=env_var, target=target)
    destination = resolve_output_path(output, path, target)
    text = render(model, context)

    if dry_run:
        formatted = format_source(text, target, str(destination))
    else:
        formatted = emit(text, destination, target)

    return GenerationResult(model=model, source=formatted, output=destination, written=not dry_run)
