"""CLI — 依赖升级"""

from __future__ import annotations

import click

from pushbot.cli import _svc, handle_errors
from pushbot.services.repo.resolver import find_repository


def register(group: click.Group) -> None:
    group.add_command(pull)


@click.command()
@click.option("--repo", "names", multiple=True, help="只升级指定仓库（可多次指定）")
@handle_errors
def pull(names: tuple[str, ...]) -> None:
    """在仓库中运行生态原生的依赖升级工具"""
    svc = _svc()
    repositories = svc.repositories(sync=True)
    if names:
        selected = []
        for name in names:
            repository = find_repository(repositories, name)
            if repository is None:
                click.echo(f"仓库不存在: {name}")
            else:
                selected.append(repository)
        repositories = selected
    status = svc.pull.pull(repositories)
    failed = [r.full_name for r in repositories if not status.get(r.clone_url)]
    click.echo(f"升级完成: {len(repositories) - len(failed)} 成功, {len(failed)} 失败")
    if failed:
        raise SystemExit(1)
