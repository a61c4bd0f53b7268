"""
Pantry Chef - CLI Entry Point.

Usage:
    pantry-chef cook-now kitchen.json          What can I cook from my pantry?
    pantry-chef metadata draft.json            Suggest metadata for a recipe draft
    pantry-chef image "Chicken Biryani"        Find or generate a dish image
    pantry-chef backfill-metadata recipes.json Fill missing metadata on stored recipes
    pantry-chef backfill-images recipes.json   Generate images for recipes without one
    pantry-chef health                         Check provider configuration
    pantry-chef serve                          Start the API server
    pantry-chef --help                         Show help
"""

import asyncio
import json
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from pantry_chef.core.entities import CookMatch, Difficulty

app = typer.Typer(
    name="pantry-chef",
    help="Pantry Chef - cook-now recommendations and AI recipe helpers.",
    add_completion=False,
)
console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level"),
) -> None:
    """Configure logging from settings."""
    from pantry_chef.config import settings

    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _load_json(path: Path) -> dict | list:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        console.print(f"[red]❌ Could not read {path}: {e}[/red]")
        raise typer.Exit(1)


def _match_table(title: str, matches: list[CookMatch], show_missing: bool) -> Table:
    table = Table(title=title, show_lines=False)
    table.add_column("Recipe", style="bold")
    if show_missing:
        table.add_column("Missing")
    table.add_column("Substitutions", style="dim")
    for match in matches:
        row = [match.recipe_name]
        if show_missing:
            row.append(", ".join(match.missing_ingredients))
        row.append("\n".join(match.substitutions))
        table.add_row(*row)
    return table


@app.command("cook-now")
def cook_now(
    kitchen_file: Path = typer.Argument(..., help="JSON file with 'pantry' and 'recipes'"),
    cuisine: str | None = typer.Option(None, "--cuisine", "-c", help="Cuisine filter"),
    max_prep: int | None = typer.Option(None, "--max-prep", help="Maximum prep time in minutes"),
    difficulty: Difficulty | None = typer.Option(None, "--difficulty", "-d", help="Difficulty filter"),
    narrative: bool = typer.Option(False, "--narrative", "-n", help="Ask an AI provider for a summary"),
) -> None:
    """Show what can be cooked now, what is close, and what to buy."""
    from pydantic import ValidationError

    from pantry_chef.cook_now import evaluate_cook_now, filter_recipes
    from pantry_chef.core.entities import AssistantFilters, PantryEntry
    from pantry_chef.llm import generate_cook_narrative
    from pantry_chef.web.ai_routes import CookNowRequest

    try:
        request = CookNowRequest.model_validate(_load_json(kitchen_file))
    except ValidationError as e:
        console.print(f"[red]❌ Invalid kitchen file: {e}[/red]")
        raise typer.Exit(1)

    pantry = [PantryEntry(name=item.name) for item in request.pantry]
    recipes = [recipe.to_recipe() for recipe in request.recipes]
    filters = AssistantFilters(cuisine_type=cuisine, max_prep_time_minutes=max_prep, difficulty=difficulty)

    evaluation = evaluate_cook_now(
        pantry=pantry,
        strict_recipes=[recipe.to_candidate() for recipe in filter_recipes(recipes, filters)],
        relaxed_recipes=[recipe.to_candidate() for recipe in recipes],
        filters=filters,
    )

    if evaluation.reason:
        console.print(
            Panel.fit(
                f"[bold]{evaluation.reason}[/bold]\n[dim]{evaluation.guidance}[/dim]",
                border_style="yellow" if evaluation.used_relaxed_filters else "red",
            )
        )

    if evaluation.can_cook_now:
        console.print(_match_table("✅ Can cook now", evaluation.can_cook_now, show_missing=False))
    if evaluation.can_almost_cook:
        console.print(_match_table("🛒 Almost there", evaluation.can_almost_cook, show_missing=True))
    if evaluation.shopping_list:
        console.print(f"\n[bold]Shopping list:[/bold] {', '.join(evaluation.shopping_list)}")

    if narrative and pantry:
        story = asyncio.run(
            generate_cook_narrative(
                pantry=[entry.name for entry in pantry],
                can_cook_now=evaluation.can_cook_now,
                can_almost_cook=evaluation.can_almost_cook,
            )
        )
        if story:
            tips = "\n".join(f"• {tip}" for tip in story.tips)
            console.print(Panel(f"{story.summary}\n\n{tips}", title=f"Chef's notes ({story.provider})"))
        else:
            console.print("[dim]No AI provider available for a narrative.[/dim]")


@app.command()
def metadata(
    draft_file: Path = typer.Argument(..., help="JSON file with name, ingredients and instructions"),
) -> None:
    """Suggest metadata for a recipe draft."""
    from pydantic import ValidationError

    from pantry_chef.llm import generate_metadata_suggestion
    from pantry_chef.web.ai_routes import MetadataDraftRequest

    try:
        draft = MetadataDraftRequest.model_validate(_load_json(draft_file))
    except ValidationError as e:
        console.print(f"[red]❌ Invalid recipe draft: {e}[/red]")
        raise typer.Exit(1)

    suggestion = asyncio.run(
        generate_metadata_suggestion(
            name=draft.name,
            ingredients=[item.name for item in draft.ingredients],
            instructions=draft.instructions,
        )
    )

    console.print_json(data=suggestion.to_dict())


@app.command()
def image(
    name: str = typer.Argument(..., help="Dish name"),
    cuisine: str | None = typer.Option(None, "--cuisine", "-c"),
    ingredient: list[str] = typer.Option([], "--ingredient", "-i", help="Repeat for each main ingredient"),
    style: str | None = typer.Option(None, "--style", help="Style hint for generation"),
) -> None:
    """Find or generate an image for a dish."""
    from pantry_chef.llm import DishImagePayload, generate_dish_image

    result = asyncio.run(
        generate_dish_image(
            DishImagePayload(name=name, cuisine_type=cuisine, ingredients=ingredient, style_prompt=style)
        )
    )

    url = result.url if not result.url.startswith("data:") else f"{result.url[:48]}… ({len(result.url)} chars)"
    console.print(f"[bold]Source:[/bold] {result.source}")
    if result.query:
        console.print(f"[bold]Query:[/bold] {result.query}")
    console.print(f"[bold]URL:[/bold] {url}")


def _load_backfill_recipes(path: Path) -> list:
    """Recipes from a JSON export: a list, or an object with a 'recipes' list."""
    from pydantic import TypeAdapter, ValidationError

    from pantry_chef.web.ai_routes import BackfillRecipeInput

    data = _load_json(path)
    if isinstance(data, dict):
        data = data.get("recipes", [])

    try:
        return TypeAdapter(list[BackfillRecipeInput]).validate_python(data)
    except ValidationError as e:
        console.print(f"[red]❌ Invalid recipe export: {e}[/red]")
        raise typer.Exit(1)


def _finish_backfill(noun: str, report, output: Path | None) -> None:
    console.print(f"Candidates scanned: {report.scanned}")
    console.print(f"{noun} updated: {report.updated}")
    console.print(f"{noun} failed: {report.failed}")

    if output is not None:
        updates = [update.to_dict() for update in report.updates]
        output.write_text(json.dumps(updates, indent=2), encoding="utf-8")
        console.print(f"[dim]Wrote {len(updates)} updates to {output}[/dim]")


@app.command("backfill-metadata")
def backfill_metadata(
    recipes_file: Path = typer.Argument(..., help="JSON export of stored recipes"),
    limit: str | None = typer.Option(None, "--limit", "-l", help="Maximum recipes to process (1-3000, default 500)"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write the updates to this JSON file"),
) -> None:
    """Regenerate metadata for recipes with missing difficulty, timings or servings."""
    from pantry_chef.services import backfill_recipe_metadata, parse_backfill_limit

    recipes = _load_backfill_recipes(recipes_file)
    report = asyncio.run(
        backfill_recipe_metadata(
            [recipe.to_draft() for recipe in recipes],
            limit=parse_backfill_limit(limit, 500),
        )
    )
    _finish_backfill("Metadata", report, output)


@app.command("backfill-images")
def backfill_images(
    recipes_file: Path = typer.Argument(..., help="JSON export of stored recipes"),
    limit: str | None = typer.Option(None, "--limit", "-l", help="Maximum recipes to process (1-3000, default 500)"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write the updates to this JSON file"),
) -> None:
    """Generate images for recipes without a renderable picture."""
    from pantry_chef.services import backfill_recipe_images, parse_backfill_limit

    recipes = _load_backfill_recipes(recipes_file)
    report = asyncio.run(
        backfill_recipe_images(
            [recipe.to_image_recipe() for recipe in recipes],
            limit=parse_backfill_limit(limit, 500),
        )
    )
    _finish_backfill("Images", report, output)


@app.command()
def health() -> None:
    """Check provider configuration."""
    from pantry_chef.config import get_settings

    console.print("\n[bold]Pantry Chef Health Check[/bold]\n")

    settings = get_settings()
    console.print("✅ Configuration loaded")
    console.print(f"   Environment: {settings.pantry_env}")
    console.print(f"   Log level: {settings.log_level}")

    if settings.has_deepseek_key:
        console.print(f"✅ DeepSeek configured ({settings.deepseek_text_model})")
    else:
        console.print("ℹ️  DeepSeek key not set, text falls through to OpenAI")

    if settings.has_openai_key:
        console.print(f"✅ OpenAI configured ({settings.openai_text_model}, {settings.openai_image_model})")
    else:
        console.print("ℹ️  OpenAI key not set, images use external lookup")

    if not (settings.has_deepseek_key or settings.has_openai_key):
        console.print("\n[yellow]No AI providers configured: heuristic fallbacks only.[/yellow]")
    else:
        console.print("\n[green]All checks passed![/green]")


@app.command()
def version() -> None:
    """Show version information."""
    from pantry_chef import __version__

    console.print(f"Pantry Chef version {__version__}")


@app.command()
def serve(
    port: int = typer.Option(8000, "--port", "-p", help="Port to run on"),
    reload: bool = typer.Option(False, "--reload", "-r", help="Enable auto-reload for development"),
) -> None:
    """Start the API server."""
    import os

    import uvicorn

    # Hosting platforms pass the port via PORT
    actual_port = int(os.environ.get("PORT", port))

    console.print("\n[bold green]Pantry Chef API[/bold green]")
    console.print(f"Starting server on http://localhost:{actual_port}")
    console.print("[dim]Press Ctrl+C to stop[/dim]\n")

    uvicorn.run(
        "pantry_chef.web.app:app",
        host="0.0.0.0",
        port=actual_port,
        reload=reload,
    )


if __name__ == "__main__":
    app()
