"""CLI entrypoint: Typer app definition and command registration"""

import typer

from folio.cli.commands import build_cmd, post_cmd, posts_cmd, render_cmd, repos_cmd


app = typer.Typer(name="folio", no_args_is_help=True, help="Portfolio blog toolchain: markdown posts -> HTML fragments")

app.command(name="render")(render_cmd)
app.command(name="build")(build_cmd)
app.command(name="posts")(posts_cmd)
app.command(name="post")(post_cmd)
app.command(name="repos")(repos_cmd)
