"""CLI — 仓库列表与同步"""

from __future__ import annotations

import click

from pushbot.cli import _svc, handle_errors
from pushbot.services.repo.resolver import repository_link


def register(group: click.Group) -> None:
    group.add_command(repos)
    group.add_command(sync)


@click.command()
@handle_errors
def repos() -> None:
    """列出项目配置解析出的全部仓库"""
    repositories = _svc().repositories()
    if not repositories:
        click.echo("没有配置任何仓库。")
        return
    for r in repositories:
        click.echo(f"  {r.full_name:30s} {r.clone_url}  -> {r.dir}")


@click.command()
@handle_errors
def sync() -> None:
    """clone 或刷新全部仓库的本地工作副本"""
    svc = _svc()
    repositories = svc.repositories()
    status = svc.sync.sync_all(repositories)
    failed = 0
    for r in repositories:
        ok = status.get(r.clone_url, False)
        failed += 0 if ok else 1
        click.echo(f"  {'OK  ' if ok else 'FAIL'} {repository_link(r)}")
    click.echo(f"同步完成: {len(repositories) - failed} 成功, {failed} 失败")
    if failed:
        raise SystemExit(1)
