# cli/commands/db.py
import click
from storyhub.errors import StoryHubError
from storyhub.sa.database import Database
from storyhub.services.seeder import seed_sample_data
from ..utils import fail

@click.group()
def db():
    """Database management commands"""
    pass

def _seed(database: Database):
    with database.get_db() as session:
        seeded = seed_sample_data(session)
    if seeded:
        click.echo(click.style("Sample data inserted", fg='green'))
    else:
        click.echo(click.style("Stories already exist, sample data skipped", fg='yellow'))

@db.command()
@click.option('--seed/--no-seed', default=False, envvar='STORYHUB_SEED_ON_INIT',
              help='Insert sample stories into an empty library')
def init(seed: bool):
    """Create all tables that do not exist yet

    Example:
        storyhub db init
        storyhub db init --seed
    """
    database = Database()
    try:
        database.init_db()
        click.echo(click.style("Schema ready", fg='green'))
        if seed:
            _seed(database)
    except StoryHubError as e:
        fail(f"Database init failed: {e}")
    finally:
        database.dispose()

@db.command()
def seed():
    """Insert sample stories if the library is empty"""
    database = Database()
    try:
        _seed(database)
    except StoryHubError as e:
        fail(f"Seeding failed: {e}")
    finally:
        database.dispose()
