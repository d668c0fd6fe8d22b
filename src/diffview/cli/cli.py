"""CLI entrypoint: Typer app definition and command registration"""

import typer

from diffview.cli.commands import conflicts_cmd, diff_cmd, patch_cmd, resolve_cmd, stats_cmd


app = typer.Typer(name="diffview", no_args_is_help=True, help="Line diffs and merge-conflict regions")

app.command(name="diff")(diff_cmd)
app.command(name="patch")(patch_cmd)
app.command(name="stats")(stats_cmd)
app.command(name="conflicts")(conflicts_cmd)
app.command(name="resolve")(resolve_cmd)
