import click
from flask.cli import with_appcontext
from flask import current_app
from gamematch.services.exceptions import CatalogError, InvalidInput


@click.command('seed-catalog')
@click.option('--dir', 'directory', required=True, type=click.Path(exists=True, file_okay=False),
              help='Directory with genres/platforms/manufacturers/tags/components/games/requirements/game_tags CSVs')
@with_appcontext
def seed_catalog_command(directory):
    """Load the game catalog from CSV files."""
    from gamematch.services.seed_service import seed_catalog

    click.echo(f"🚀 Seeding catalog from {directory}...")
    counts = seed_catalog(directory)
    click.echo(f"""
    ✅ Complete!
    - Genres: {counts['genres']}
    - Platforms: {counts['platforms']}
    - Manufacturers: {counts['manufacturers']}
    - Tags: {counts['tags']}
    - Components: {counts['components']}
    - Games: {counts['games']}
    - Requirement sets: {counts['requirements']}
    - Game tags: {counts['game_tags']}
    - Skipped rows: {counts['skipped']}
    """)


@click.command('create-admin')
@click.argument('email')
@click.option('--password', prompt=True, hide_input=True, confirmation_prompt=True)
@click.option('--name', default='Admin')
@with_appcontext
def create_admin_command(email, password, name):
    """
    Create an administrator account

    Usage: flask create-admin admin@example.com --password=secret
    """
    from gamematch.services.user_service import find_user_by_email, register_user

    existing = find_user_by_email(email)
    if existing:
        click.echo(f"✓ User {existing.email} already exists (role: {existing.role})")
        return

    try:
        admin = register_user(email, password, name=name, role='admin')
    except CatalogError as e:
        click.echo(f"❌ Error: {e.message}", err=True)
        raise SystemExit(1)
    click.echo(f"✅ Admin user created with ID: {admin.id}")


@click.command('clear-db')
@click.option('--yes', is_flag=True, help='Do not ask for confirmation')
@with_appcontext
def clear_db_command(yes):
    """Delete all rows from every table"""
    from gamematch.services.seed_service import clear_database

    if not yes and not click.confirm('This deletes ALL data. Continue?'):
        click.echo("Aborted.")
        return
    clear_database()
    click.echo("✅ Database cleared")


@click.command('match-games')
@click.option('--ram', required=True, type=float, help='RAM in GB')
@click.option('--vram', required=True, type=float, help='VRAM in MB')
@click.option('--cpu-id', type=int, default=None)
@click.option('--gpu-id', type=int, default=None)
@click.option('--min-ratio', type=float, default=None, help='Minimum performance ratio')
@click.option('--genre-id', type=int, default=None)
@click.option('--policy', type=click.Choice(['best', 'first']), default=None,
              help='Requirement set policy (defaults to MATCH_REQUIREMENT_POLICY)')
@click.option('--limit', type=int, default=20)
@with_appcontext
def match_games_command(ram, vram, cpu_id, gpu_id, min_ratio, genre_id, policy, limit):
    """
    Rank the catalog for a hardware descriptor

    Usage: flask match-games --ram 16 --vram 8192 --cpu-id 3 --gpu-id 7
    """
    from gamematch.services.catalog_reader import SqlAlchemyCatalogReader
    from gamematch.services.match_input import parse_match_input
    from gamematch.services.match_service import MatchService

    try:
        match_input = parse_match_input({
            'ram': ram, 'vram': vram, 'cpuId': cpu_id, 'gpuId': gpu_id,
            'minPerformanceRatio': min_ratio, 'genreId': genre_id,
        }, default_min_ratio=current_app.config.get('MATCH_DEFAULT_MIN_RATIO', 0.0))
    except InvalidInput as e:
        click.echo(f"❌ Invalid input: {e}", err=True)
        raise SystemExit(2)

    service = MatchService(
        SqlAlchemyCatalogReader(),
        policy=policy or current_app.config.get('MATCH_REQUIREMENT_POLICY', 'best')
    )
    try:
        outcome = service.match(match_input)
    except InvalidInput as e:
        click.echo(f"❌ Invalid input: {e}", err=True)
        raise SystemExit(2)

    if outcome.is_empty:
        click.echo("No games match this hardware.")
    else:
        click.echo(f"\n{'#':<4} {'Title':<40} {'Year':<6} {'Ratio':>7} {'Score':>7}")
        click.echo("-" * 68)
        for rank, result in enumerate(outcome.results[:limit], start=1):
            click.echo(
                f"{rank:<4} {result.game.title[:40]:<40} {str(result.game.release_year or '-'):<6} "
                f"{result.performance_ratio:>7.2f} {result.score:>7.2f}"
            )
        click.echo(f"\nTotal: {len(outcome.results)} game(s)")

    stats = outcome.stats
    click.echo(
        f"Filtered by: RAM {stats.filtered_by_ram} | VRAM {stats.filtered_by_vram} | "
        f"CPU {stats.filtered_by_cpu} | GPU {stats.filtered_by_gpu} | "
        f"performance {stats.filtered_by_performance} | integrity {stats.integrity_errors}"
    )


# Register all commands
def register_commands(app):
    """Register all Flask CLI commands"""
    app.cli.add_command(seed_catalog_command)
    app.cli.add_command(create_admin_command)
    app.cli.add_command(clear_db_command)
    app.cli.add_command(match_games_command)
