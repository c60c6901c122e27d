#!/usr/bin/env python3
"""
codetag - Highlighted code blocks for a static blog

Renders every {% code %}...{% endcode %} block tag found in a tree of
documents, writing the documents with the tags replaced by HTML.

As an aside, this codebase leverages the ChRIS "plugin" concept/pattern as
general purpose python app development framework.

Tag syntax:
    {% code ruby caption="Hello World" highlight=[1,3,5-7] %}
    ...
    {% endcode %}

Usage:
    codetag inputdir/ outputdir/ --pattern "**/*.md"

Examples:
    # Render all markdown documents
    codetag posts/ build/posts/

    # Liquid templates, verbose output
    codetag site/ build/ --pattern "**/*.liquid" -vv
"""

import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

from chris_plugin import chris_plugin
from .config import appsettings
from .lib import Document, CodeRenderer, __version__, LOG, state_connectToLogger
from .models import ProgramState, pipeline


# Define CLI arguments
parser = ArgumentParser(
    description="codetag - Render code block tags in documents to highlighted HTML",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--pattern",
    default=appsettings.document_pattern,
    type=str,
    help="Glob (relative to inputdir) selecting documents to render",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate the input directory and collect documents to render.

    Args:
        inputstate: Initial program state with CLI options

    Returns:
        ProgramState with added fields:
            - inputFiles: Sorted document paths matching the pattern
            - envOK: True if environment is valid

    Exits:
        1 if inputdir does not exist
    """

    state = inputstate.copy()

    LOG("Checking environment...", level=2)

    if state.inputdir is None or not state.inputdir.is_dir():
        print(f"Error: Input directory not found: {state.inputdir}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    state.inputFiles = sorted(p for p in state.inputdir.glob(state.pattern) if p.is_file())
    LOG(f"Matched {len(state.inputFiles)} document(s) with '{state.pattern}'", level=2)

    if not state.inputFiles:
        LOG(f"Warning: no documents match '{state.pattern}'", level=1)

    state.outputdir.mkdir(parents=True, exist_ok=True)
    LOG(f"Output directory: {state.outputdir}", level=2)

    state.envOK = True
    return state


def documents_render(inputstate: ProgramState) -> ProgramState:
    """
    Render every collected document into the output directory.

    Each document is written to the same relative path below outputdir.

    Args:
        inputstate: Program state with inputFiles set

    Returns:
        ProgramState with added field:
            - renderResult: Dict containing:
                - status: bool
                - documents: int (documents written)
                - tags: int (code tags rendered)
                - output_files: List[str]

    Exits:
        1 if a document cannot be read or a tag fails to tokenize
    """

    state = inputstate.copy()

    LOG("Rendering documents...", level=1)

    renderer = CodeRenderer()
    output_files = []
    tag_count = 0

    for input_file in state.inputFiles:
        relative = input_file.relative_to(state.inputdir)
        output_file = state.outputdir / relative

        try:
            source = input_file.read_text(encoding="utf-8")
            document = Document(source, renderer=renderer)
            rendered = document.render()
            tag_count += document.tags_rendered
        except Exception as e:
            print(f"Render error in {relative}: {e}", file=sys.stderr)
            if state.verbosity >= 3:
                import traceback

                traceback.print_exc()
            sys.exit(1)

        output_file.parent.mkdir(parents=True, exist_ok=True)
        output_file.write_text(rendered, encoding="utf-8")
        output_files.append(str(output_file))
        LOG(f"Wrote {output_file}", level=2)

    state.renderResult = {
        'status': True,
        'documents': len(output_files),
        'tags': tag_count,
        'output_files': output_files,
    }
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display rendering results to user.

    Args:
        inputstate: Program state with renderResult populated

    Returns:
        ProgramState unchanged (terminal pipeline stage)

    Exits:
        1 if renderResult is None
    """
    state: ProgramState = inputstate.copy()
    if not state.renderResult:
        print("Error: Rendering failed", file=sys.stderr)
        sys.exit(1)

    LOG("\n✓ Rendering successful!", level=1)
    LOG(f"  Documents: {state.renderResult['documents']}", level=1)
    LOG(f"  Code tags: {state.renderResult['tags']}", level=1)
    LOG(f"  Output:    {state.outputdir}", level=1)
    return state


@chris_plugin(
    parser=parser,
    title="codetag - Highlighted code blocks for a static blog",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - render code tags in every matching document.

    Orchestrates the pipeline:
        1. env_check: Validate inputdir, collect documents
        2. documents_render: Render tags and write documents
        3. results_report: Display results to user

    Args:
        options: CLI arguments from argparse
            - pattern: str - Document glob
            - verbosity: int - Logging verbosity level (1-3)
        inputdir: Directory containing source documents
        outputdir: Directory where rendered documents will be written

    Note:
        This function is wrapped by @chris_plugin which handles CLI
        argument parsing and invokes this function with parsed values.
    """

    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    # Connect state to logger for entire pipeline
    state_connectToLogger(state)

    pipeline(state, env_check, documents_render, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
