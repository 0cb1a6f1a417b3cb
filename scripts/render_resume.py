#!/usr/bin/env python3
"""
Resume Rendering CLI

Fills author-supplied LaTeX templates with resume data while keeping each
template's own style, compiles rendered LaTeX to PDF, and lists templates.

Commands:
    render    - Render a resume data file (YAML or JSON) into a .tex file
    compile   - Compile a rendered .tex file to PDF
    templates - List available templates

Examples:\n

    render_resume.py render data/jane.yaml template12                 # Writes template12_jane.tex

    render_resume.py render data/jane.yaml template12 -o out/cv.tex   # Explicit output path

    render_resume.py render data/jane.yaml template12 --enhance -j job.txt

    render_resume.py compile out/cv.tex --output-dir out/pdf

    render_resume.py templates
"""

from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from vellum.contexts.enhancement import ContentEnhancer
from vellum.contexts.rendering import compile_resume
from vellum.contexts.templating import (
    RenderError,
    RenderOptions,
    ResumeRenderer,
    ResumeValidationError,
    TemplateNotFoundError,
    TemplateStore,
)
from vellum.contexts.templating.logger import setup_templating_logger
from vellum.contexts.templating.resume_data_structure import load_resume_file
from vellum.utils.logger import session_log_dir

load_dotenv()


app = typer.Typer(
    help="Render resume data into style-preserving LaTeX templates and compile them to PDF",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("render")
def render_command(
    data_file: Annotated[
        Path,
        typer.Argument(
            help="Resume data file (.yaml, .yml or .json)",
            exists=True,
            file_okay=True,
            dir_okay=False,
        ),
    ],
    template_id: Annotated[
        str,
        typer.Argument(help="Template identifier (directory name in the templates store)"),
    ],
    output: Annotated[
        Optional[Path],
        typer.Option(
            "--output",
            "-o",
            help="Output .tex path (default: <template_id>_<data file stem>.tex)",
        ),
    ] = None,
    templates_dir: Annotated[
        Optional[Path],
        typer.Option(
            "--templates-dir",
            "-t",
            help="Templates root (default: TEMPLATES_PATH from environment)",
        ),
    ] = None,
    enhance: Annotated[
        bool,
        typer.Option(
            "--enhance",
            "-e",
            help="Rewrite content with the configured LLM provider before rendering",
        ),
    ] = False,
    job_description: Annotated[
        Optional[Path],
        typer.Option(
            "--job-description",
            "-j",
            help="Job posting text file to optimize content for (implies --enhance)",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    template_file: Annotated[
        Optional[Path],
        typer.Option(
            "--template-file",
            "-f",
            help="Use this template source instead of loading TEMPLATE_ID from the store",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
):
    """
    Render a resume data file into a LaTeX document.

    Logs are saved to outs/logs/template_TIMESTAMP/.

    Examples:\n

        $ render_resume.py render tests/fixtures/jane_doe.yaml template12

        $ render_resume.py render data.yaml mytemplate --template-file my.tex -o cv.tex
    """
    log_dir = session_log_dir("template")
    setup_templating_logger(log_dir, template_id=template_id)

    output_path = output or Path(f"{template_id}_{data_file.stem}.tex")
    use_ai = enhance or job_description is not None

    options = RenderOptions(
        enhance_with_ai=use_ai,
        job_description=job_description.read_text(encoding="utf-8") if job_description else None,
        custom_template_code=template_file.read_text(encoding="utf-8") if template_file else None,
    )

    renderer = ResumeRenderer(
        store=TemplateStore(templates_dir) if templates_dir else None,
        enhancer=ContentEnhancer() if use_ai else None,
    )

    typer.secho(f"\nRendering {data_file.name} with {template_id}\n", fg=typer.colors.BLUE, bold=True)

    try:
        resume_data = load_resume_file(data_file)
        latex = renderer.render(resume_data, template_id, options)
    except ResumeValidationError as e:
        typer.secho(f"✗ Invalid resume data: {e}", fg=typer.colors.RED, err=True)
        if e.missing_fields:
            typer.echo(f"  Missing: {', '.join(e.missing_fields)}", err=True)
        raise typer.Exit(code=1)
    except TemplateNotFoundError as e:
        typer.secho(f"✗ {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    except RenderError as e:
        typer.secho(f"✗ {e}", fg=typer.colors.RED, err=True)
        typer.echo(f"  Details in {log_dir}", err=True)
        raise typer.Exit(code=1)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(latex, encoding="utf-8")

    typer.secho(f"✓ Success! LaTeX saved to: {output_path}", fg=typer.colors.GREEN)
    typer.echo(f"  {len(latex)} characters")


@app.command("compile")
def compile_command(
    tex_file: Annotated[
        Path,
        typer.Argument(
            help="Rendered .tex file",
            exists=True,
            file_okay=True,
            dir_okay=False,
        ),
    ],
    output_dir: Annotated[
        Optional[Path],
        typer.Option(
            "--output-dir",
            "-o",
            help="Directory for the PDF (default: next to the .tex file)",
        ),
    ] = None,
    num_passes: Annotated[
        int,
        typer.Option(
            "--passes",
            "-p",
            help="Number of compiler passes (default: 2 for cross-references)",
            min=1,
            max=5,
        ),
    ] = 2,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Show detailed compilation output (compiler stdout/stderr)",
        ),
    ] = False,
):
    """
    Compile a rendered LaTeX resume to PDF.

    Logs are saved to outs/logs/render_TIMESTAMP/.

    Examples:\n

        $ render_resume.py compile template12_jane.tex

        $ render_resume.py compile cv.tex --output-dir out --passes 3 --verbose
    """
    typer.secho(f"\nCompiling: {tex_file.name}\n", fg=typer.colors.BLUE, bold=True)

    result = compile_resume(tex_file, output_dir=output_dir, num_passes=num_passes, verbose=verbose)

    if not result.success:
        typer.secho("✗ Compilation failed", fg=typer.colors.RED, err=True)
        for err in result.errors[:5]:
            typer.echo(f"  {err}", err=True)
        raise typer.Exit(code=1)

    typer.secho(f"✓ Success! PDF saved to: {result.pdf_path}", fg=typer.colors.GREEN)
    if result.page_count is not None:
        typer.echo(f"  Pages: {result.page_count}")
    if result.warnings:
        typer.echo(f"  Warnings: {len(result.warnings)}")


@app.command("templates")
def templates_command(
    templates_dir: Annotated[
        Optional[Path],
        typer.Option(
            "--templates-dir",
            "-t",
            help="Templates root (default: TEMPLATES_PATH from environment)",
        ),
    ] = None,
):
    """
    List available templates.

    Example:\n

        $ render_resume.py templates --templates-dir tests/fixtures/templates
    """
    store = TemplateStore(templates_dir)
    templates = store.list_templates()

    if not templates:
        typer.secho(f"No templates found in {store.templates_path}", fg=typer.colors.YELLOW, err=True)
        raise typer.Exit(code=1)

    typer.secho(f"\nTemplates in {store.templates_path} ({len(templates)}):", fg=typer.colors.BLUE, bold=True)
    for info in templates:
        preview = f"  [{info.screenshot_url}]" if info.screenshot_url else ""
        typer.echo(f"  • {info.id:<20} {info.name}{preview}")


if __name__ == "__main__":
    app()
