"""
命令行入口

    linkhop resolve "https://drive.google.com/file/d/<id>/view"
"""
import json
from typing import Optional

import typer

from .core.errors import NotRecognized, ResolveError
from .core.models import ResolveOptions
from .core.registry import resolve, resolve_or_passthrough
from .utils.settings import load_settings

app = typer.Typer(help="把网盘分享链接解析为可直接下载的请求", add_completion=False)


@app.callback()
def main() -> None:
    """LinkHop 命令行工具"""


@app.command("resolve")
def resolve_command(
    url: str = typer.Argument(..., help="分享链接"),
    user_agent: Optional[str] = typer.Option(None, "--user-agent", help="覆盖 User-Agent"),
    cookie: Optional[str] = typer.Option(None, "--cookie", help="额外的 Cookie，例如 'a=1; b=2'"),
    referer: Optional[str] = typer.Option(None, "--referer", help="来源地址，其 name 参数会作为文件名"),
    max_hops: Optional[int] = typer.Option(None, "--max-hops", min=1, help="单次遍历的最大请求次数"),
    config: Optional[str] = typer.Option(None, "--config", help="配置文件路径"),
    passthrough: bool = typer.Option(False, "--passthrough", help="无法识别时按普通直链输出"),
) -> None:
    """解析分享链接并以 JSON 输出解析描述"""
    settings = load_settings(config)
    if max_hops is not None:
        settings["max_hops"] = max_hops
    options = ResolveOptions(user_agent=user_agent, cookie=cookie, referer=referer)

    try:
        if passthrough:
            descriptor = resolve_or_passthrough(url, options, settings=settings)
        else:
            descriptor = resolve(url, options, settings=settings)
    except NotRecognized as e:
        typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(2)
    except ResolveError as e:
        typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(1)

    if not descriptor.resolved:
        typer.echo("⚠️ 未能确认直链，输出的是尽力而为的候选地址", err=True)
    typer.echo(json.dumps(descriptor.to_dict(), ensure_ascii=False, indent=2))
