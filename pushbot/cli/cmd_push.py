"""CLI — 版本推送"""

from __future__ import annotations

import click

from pushbot.cli import _svc, handle_errors
from pushbot.services.repo.resolver import bind_directory


def register(group: click.Group) -> None:
    group.add_command(push)


@click.command()
@click.argument("sources", nargs=-1, type=click.Path(exists=True, file_okay=False))
@click.option("--no-sync", is_flag=True, help="不 clone / 刷新目标仓库，直接使用本地工作副本")
@handle_errors
def push(sources: tuple[str, ...], no_sync: bool) -> None:
    """把源仓库（默认当前目录）的版本推送到项目中的全部仓库"""
    svc = _svc()
    source_repos = [bind_directory(s, svc.executor) for s in (sources or (".",))]
    targets = svc.repositories() if no_sync else None
    results = svc.push.push(source_repos, targets=targets)

    modified = 0
    for result in results:
        for context in result.contexts:
            modified += 1
            click.echo(f"  {result.repository.full_name}: {context.create_title()}")
            for change in context.changes:
                click.echo(f"      {change.dependency_key}: {change.old_value} -> {change.new_value}")
        for change in result.invalid_changes:
            click.echo(f"  {result.repository.full_name}: 跳过无效候选 {change}")
    click.echo(f"推送完成: {len(results)} 个仓库, {modified} 处修改")

