"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient

from recipe_relay.config import Settings
from recipe_relay.main import create_app

RECIPE_HTML = """
<html>
  <head><title>Lemon Cake | Example Kitchen</title></head>
  <body>
    <h1>Lemon Cake</h1>
    <a class="featured-category" href="/desserts">Desserts</a>
    <div class="recipe-description">A bright, <em>tangy</em> loaf cake.</div>
    <span class="prep-time">15 mins</span>
    <span class="cook-time">45 mins</span>
    <ul>
      <li class="ingredient"><span class="ingredient-amount">2</span> <span class="ingredient-item">eggs</span></li>
      <li class="ingredient"><span class="ingredient-amount">1 cup</span> <span class="ingredient-item">sugar</span></li>
      <li class="ingredient"><span class="ingredient-amount">1</span> <span class="ingredient-item">lemon, zested</span></li>
    </ul>
    <ol>
      <li class="instruction-step">Mix</li>
      <li class="instruction-step">Bake</li>
    </ol>
    <span class="nutrition-calories">320 kcal</span>
    <span class="nutrition-protein">5 g</span>
    <span class="nutrition-fat">14 g</span>
    <span class="nutrition-carbs">44 g</span>
    <span class="servings">8</span>
  </body>
</html>
"""


@pytest.fixture
def recipe_html() -> str:
    return RECIPE_HTML


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        token_registry="memory",
        notification_delay_seconds=0.0,
        shutdown_drain_seconds=0.1,
        rate_limit_enabled=False,
        enabled_routes="notifications,recipes,auth",
    )


@pytest.fixture
def app(test_settings):
    return create_app(test_settings)


@pytest.fixture
def client(app):
    """Create test client."""
    return TestClient(app)
