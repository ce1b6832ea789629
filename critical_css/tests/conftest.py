"""Pytest configuration for Critical CSS tests."""

import logging

import pytest

from ..core.nodes import Declaration, MediaRule, Rule, Stylesheet

# Configure logging
logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

def make_rule(selectors, **declarations):
    """Build a rule; keyword names use underscores for dashes."""
    return Rule(
        list(selectors),
        [Declaration(name.replace('_', '-'), value) for name, value in declarations.items()]
    )

@pytest.fixture
def rule():
    """Return the rule factory."""
    return make_rule

@pytest.fixture
def source_ast():
    """Return a stylesheet holding the selectors seen on a page."""
    return Stylesheet([
        make_rule(['.a'], color='red'),
        make_rule(['.b.c']),
        MediaRule('all and (min-width: 768px)', [
            make_rule(['.nav'], display='flex'),
        ]),
        MediaRule('(min-width: 768px)', [
            make_rule(['.header'], padding='10px'),
        ]),
    ])

@pytest.fixture
def target_ast():
    """Return a full stylesheet to be filtered."""
    return Stylesheet([
        make_rule(['.a'], color='red'),
        make_rule(['.b'], color='blue'),
        make_rule(['.c.b'], margin='0'),
        make_rule(['.b.c'], margin='0'),
        MediaRule('(min-width: 768px)', [
            make_rule(['.nav'], display='block'),
            make_rule(['.header'], padding='20px'),
            make_rule(['.footer'], padding='5px'),
        ]),
        MediaRule('print', [
            make_rule(['.a'], color='black'),
        ]),
    ])

@pytest.fixture(scope='session')
def sample_css():
    """Return sample CSS content for testing."""
    return """
    body {
        color: #333;
        margin: 0;
    }

    .container {
        max-width: 1200px;
        margin: 0 auto;
    }

    .header, .header--sticky {
        background-color: #f5f5f5;
        padding: 10px !important;
    }

    /* not critical */
    .footer {
        padding: 15px;
    }

    @keyframes spin {
        from { transform: rotate(0deg); }
        to { transform: rotate(360deg); }
    }

    @font-face {
        font-family: "Test";
        src: url("test.woff2");
    }

    @media (max-width: 768px) {
        .container {
            padding: 0 10px;
        }

        .footer {
            display: none;
        }
    }
    """

@pytest.fixture(scope='session')
def used_css():
    """Return CSS holding only the selectors rendered above the fold."""
    return """
    body { color: #333; }
    .header, .header--sticky { padding: 10px; }
    @media (max-width: 768px) {
        .container { padding: 0 10px; }
    }
    """
