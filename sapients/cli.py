"""Sapients tracker CLI tool (sapientsctl)."""

import typer

from sapients.models.role import Role

app = typer.Typer(name="sapientsctl", help="Sapients tracker CLI")
db_app = typer.Typer(help="Database management commands")
users_app = typer.Typer(help="User provisioning commands")
sessions_app = typer.Typer(help="Session maintenance commands")
app.add_typer(db_app, name="db")
app.add_typer(users_app, name="users")
app.add_typer(sessions_app, name="sessions")


@db_app.command("create-tables")
def db_create_tables():
    """Create all tables that do not exist yet."""
    from sapients.db.session import create_tables

    create_tables()
    typer.echo("Tables created (or already exist)")


@db_app.command("seed")
def db_seed():
    """Seed the administrator account."""
    from sapients.core.exceptions import ValidationError
    from sapients.db.session import SessionLocal
    from sapients.db.seeds.seed_admin import seed_admin

    db = SessionLocal()
    try:
        created = seed_admin(db)
    except ValidationError as e:
        typer.echo(e.message, err=True)
        raise typer.Exit(code=1)
    finally:
        db.close()
    typer.echo("Admin created" if created else "Admin already exists")


@users_app.command("create")
def users_create(
    email: str = typer.Argument(..., help="Login email"),
    name: str = typer.Argument(..., help="Display name"),
    role: Role = typer.Option(Role.VIEWER, help="Role"),
    password: str = typer.Option(..., prompt=True, hide_input=True, confirmation_prompt=True),
):
    """Provision a user account."""
    from sapients.core.exceptions import ResourceConflictError, ValidationError
    from sapients.db.session import SessionLocal
    from sapients.services.auth_service import auth_service

    db = SessionLocal()
    try:
        user = auth_service.create_user(db, email=email, name=name, password=password, role=role)
    except (ResourceConflictError, ValidationError) as e:
        typer.echo(e.message, err=True)
        raise typer.Exit(code=1)
    finally:
        db.close()
    typer.echo(f"Created {user.email} ({user.role.value})")


@sessions_app.command("purge")
def sessions_purge():
    """Delete expired sessions now."""
    from sapients.db.session import SessionLocal
    from sapients.services.session_service import session_service

    db = SessionLocal()
    try:
        deleted = session_service.purge_expired_sessions(db)
    finally:
        db.close()
    typer.echo(f"Purged {deleted} expired sessions")


@app.command("serve")
def serve(
    host: str = typer.Option("0.0.0.0", help="Host"),
    port: int = typer.Option(8000, help="Port"),
    reload: bool = typer.Option(False, help="Auto-reload"),
):
    """Start the API server."""
    import uvicorn
    uvicorn.run("sapients.main:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    app()
