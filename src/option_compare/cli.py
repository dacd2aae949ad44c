#!/usr/bin/env python3
"""
Option Compare CLI - command line front end for the decision matrix

Works against a JSON file standing in for the browser's localStorage.
"""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from tabulate import tabulate

from .clipboard import CommandClipboard
from .config import AppConfig
from .session import Session, create_session
from .share import UrlLocation


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr
    )


def _open_session(config: AppConfig, url: Optional[str] = None) -> Session:
    location = UrlLocation(url) if url else None
    session = create_session(config, location=location, clipboard=CommandClipboard())
    session.start()
    return session


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


@click.group()
@click.version_option(version="1.0.0", prog_name="option-compare")
@click.option('--storage', type=click.Path(dir_okay=False, path_type=Path),
              help='Storage file (default: $OPTION_COMPARE_STORAGE_PATH)')
@click.option('--verbose', '-v', is_flag=True, help='Verbose logging')
@click.pass_context
def main(ctx: click.Context, storage: Optional[Path], verbose: bool):
    """Weighted decision matrix: compare options against criteria"""
    config = AppConfig.from_env()
    if storage:
        config.storage_path = storage
    if verbose:
        config.log_level = 'DEBUG'
    _configure_logging(config.log_level)
    ctx.obj = config


@main.command('projects')
@click.pass_obj
def list_projects(config: AppConfig):
    """List projects, most recently updated first"""
    session = _open_session(config)
    active_id = session.store.active_project_id
    rows = [
        ['*' if p.id == active_id else '', p.id, p.name, len(p.options), len(p.criteria), p.updated_at]
        for p in session.store.list_projects()
    ]
    click.echo(tabulate(rows, headers=['', 'ID', 'Name', 'Options', 'Criteria', 'Updated'], tablefmt='grid'))


@main.command()
@click.argument('name', required=False)
@click.pass_obj
def new(config: AppConfig, name: Optional[str]):
    """Create a project and make it active"""
    session = _open_session(config)
    project = session.store.create_new_project(name)
    click.echo(f"Created {project.id} ({project.name})")


@main.command()
@click.argument('project_id')
@click.pass_obj
def switch(config: AppConfig, project_id: str):
    """Make another project active"""
    session = _open_session(config)
    if not session.store.switch_project(project_id):
        _fail(f"unknown project {project_id}")
    click.echo(f"Active project: {session.store.project_name}")


@main.command()
@click.argument('name')
@click.option('--project', 'project_id', help='Project to rename (default: active)')
@click.pass_obj
def rename(config: AppConfig, name: str, project_id: Optional[str]):
    """Rename a project"""
    session = _open_session(config)
    if not session.store.update_project_name(project_id or session.store.active_project_id, name):
        _fail(f"unknown project {project_id}")
    click.echo(f"Renamed to {name}")


@main.command()
@click.argument('project_id', required=False)
@click.option('--name', help='Name of the copy')
@click.pass_obj
def duplicate(config: AppConfig, project_id: Optional[str], name: Optional[str]):
    """Copy a project (default: active) and make the copy active"""
    session = _open_session(config)
    project = session.store.duplicate_project(project_id or session.store.active_project_id, name)
    if project is None:
        _fail(f"unknown project {project_id}")
    click.echo(f"Created {project.id} ({project.name})")


@main.command()
@click.argument('project_id')
@click.pass_obj
def delete(config: AppConfig, project_id: str):
    """Delete a project"""
    session = _open_session(config)
    if not session.store.delete_project(project_id):
        _fail(f"unknown project {project_id}")
    click.echo(f"Deleted {project_id}; active project: {session.store.project_name}")


@main.command('add-option')
@click.argument('name')
@click.pass_obj
def add_option(config: AppConfig, name: str):
    """Add an option to the active project"""
    session = _open_session(config)
    option = session.store.add_option(name)
    click.echo(f"Added option {option.id} ({option.name})")


@main.command('remove-option')
@click.argument('option_id')
@click.pass_obj
def remove_option(config: AppConfig, option_id: str):
    """Remove an option and its evaluations"""
    session = _open_session(config)
    if not session.store.remove_option(option_id):
        _fail(f"unknown option {option_id}")
    click.echo(f"Removed option {option_id}")


@main.command('add-criterion')
@click.argument('name')
@click.option('--weight', '-w', type=float, default=5, show_default=True, help='Criterion weight')
@click.pass_obj
def add_criterion(config: AppConfig, name: str, weight: float):
    """Add a weighted criterion to the active project"""
    session = _open_session(config)
    criterion = session.store.add_criteria(name, weight)
    click.echo(f"Added criterion {criterion.id} ({criterion.name}, weight {criterion.weight:g})")


@main.command('remove-criterion')
@click.argument('criteria_id')
@click.pass_obj
def remove_criterion(config: AppConfig, criteria_id: str):
    """Remove a criterion and its evaluations"""
    session = _open_session(config)
    if not session.store.remove_criteria(criteria_id):
        _fail(f"unknown criterion {criteria_id}")
    click.echo(f"Removed criterion {criteria_id}")


@main.command()
@click.argument('option_id')
@click.argument('criteria_id')
@click.argument('value', type=float)
@click.pass_obj
def score(config: AppConfig, option_id: str, criteria_id: str, value: float):
    """Set the evaluation of one option against one criterion"""
    session = _open_session(config)
    option_ids = {o.id for o in session.store.options}
    criteria_ids = {c.id for c in session.store.criteria}
    if option_id not in option_ids:
        _fail(f"unknown option {option_id}")
    if criteria_id not in criteria_ids:
        _fail(f"unknown criterion {criteria_id}")
    session.store.set_evaluation(option_id, criteria_id, value)
    click.echo(f"Set {option_id} / {criteria_id} = {value:g}")


@main.command()
@click.pass_obj
def rank(config: AppConfig):
    """Show the weighted ranking for the active project"""
    session = _open_session(config)
    store = session.store
    criteria = store.criteria

    click.echo(f"Project: {store.project_name}")
    headers = ['#', 'Option', 'Score'] + [f"{c.name} (x{c.weight:g})" for c in criteria]
    rows = []
    for position, ranked in enumerate(store.ranked_options, 1):
        rows.append(
            [position, ranked.name, ranked.score]
            + [f"{ranked.breakdown.get(c.id, 0):g}" for c in criteria]
        )
    click.echo(tabulate(rows, headers=headers, tablefmt='grid'))


@main.command()
@click.option('--copy', is_flag=True, help='Copy the link to the clipboard')
@click.pass_obj
def share(config: AppConfig, copy: bool):
    """Print a share link for the active project"""
    session = _open_session(config)
    click.echo(session.share.share_url())
    if copy:
        if asyncio.run(session.share.copy_share_link()):
            click.echo("Copied to clipboard", err=True)
        else:
            click.echo("Could not copy to clipboard", err=True)


@main.command('open')
@click.argument('url')
@click.pass_obj
def open_link(config: AppConfig, url: str):
    """Import the project carried by a share link"""
    session = create_session(config, location=UrlLocation(url))
    result = session.start()
    if result.source.value != 'url':
        click.echo(f"Link not imported, using {result.source.value} data", err=True)
    click.echo(f"Active project: {session.store.project_name} ({session.store.active_project_id})")


if __name__ == '__main__':
    main()
