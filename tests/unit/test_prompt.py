"""Unit tests for PromptTemplate rendering."""

import logging
from unittest.mock import Mock

import pytest

from promptschema.core.config import Settings
from promptschema.interfaces.renderer import BaseTemplateRenderer, TemplateRenderError
from promptschema.strategies.template_engine.prompt import PromptTemplate

EXPERIENCE_TEMPLATE = (
    "Hello {{ name }}! Welcome to {{ company }}.\n"
    "Your role is {{ role }}"
    "{% if experience == 0 %} and welcome to your first professional role!"
    "{% elif experience > 0 %} and well done on your {{ experience|floatformat:0 }} years of experience!"
    "{% endif %}"
    "{% if experience == 10 or experience == 15 or experience == 20 %}"
    " We truly appreciate your significant contribution to the industry.{% endif %}"
)

DATA_ANALYSIS_TEMPLATE = """You are a data analyst working with {{ dataset_type }} data.

**Analysis Objective:** {{ objective }}

**Dataset Overview:**
- Total records: {{ data_info.records }}
- Columns: {{ data_info.columns }}
- Missing data: {{ missing_percentage }}%
{% if missing_percentage > 10 %}
High percentage of missing data detected!
{% endif %}

**Key Variables:**
{% for var in variables %}
- **{{ var.name }}** ({{ var.type }}){% if var.description %}: {{ var.description }}{% endif %}{% if var.unique_values %} - {{ var.unique_values }} unique values{% endif %}
{% endfor %}

{% if hypotheses %}
**Research Hypotheses:**
{% for hypothesis in hypotheses %}
H{{ forloop.Counter }}: {{ hypothesis }}
{% endfor %}
{% endif %}

**Analysis Tasks:**
{% for task in tasks %}
{{ forloop.Counter }}. {{ task }}
{% endfor %}

Please provide your analysis with clear methodology, findings, and actionable insights."""


@pytest.fixture
def settings():
    """Create default settings."""
    return Settings()


# =============================================================================
# Basic Rendering Tests
# =============================================================================


class TestPromptTemplate:
    """Test suite for PromptTemplate."""

    def test_basic_render(self, settings):
        """Test rendering with all variables supplied."""
        prompt = PromptTemplate("Hello {{ name }}! You are {{ age }} years old.", settings=settings)

        result = prompt.render({"name": "Alice", "age": 30})

        assert result.rendered_prompt == "Hello Alice! You are 30 years old."
        assert result.missing_variables == []

    def test_multiline_render(self, settings):
        """Test rendering a multi-line task prompt."""
        prompt = PromptTemplate(
            "Task: {{ task }}\nContext: {{ context }}\nPlease {{ instruction }}.",
            settings=settings,
        )

        result = prompt.render(
            {
                "task": "Analyze the sentiment",
                "context": "customer feedback",
                "instruction": "provide a detailed analysis",
            }
        )

        assert result.rendered_prompt == (
            "Task: Analyze the sentiment\nContext: customer feedback\n"
            "Please provide a detailed analysis."
        )

    def test_conditional_block_with_whitespace_control(self, settings):
        """Test an optional examples block trimmed with -%}."""
        template = (
            "You are a {{ role }}.\n\n"
            "{% if examples -%}\nExamples:\n{{ examples }}\n{% endif -%}\n\n"
            "Please respond with {{ format }}."
        )
        prompt = PromptTemplate(template, settings=settings)

        with_examples = prompt.render(
            {"role": "helpful AI assistant", "examples": "Example 1", "format": "steps"}
        )
        without_examples = prompt.render({"role": "helpful AI assistant", "format": "steps"})

        assert "You are a helpful AI assistant." in with_examples.rendered_prompt
        assert "Examples:\nExample 1" in with_examples.rendered_prompt
        assert "Examples:" not in without_examples.rendered_prompt
        assert without_examples.missing_variables == ["examples"]

    def test_output_is_trimmed(self, settings):
        """Test that surrounding whitespace is stripped by default."""
        prompt = PromptTemplate("\n\n  {{ name }}  \n", settings=settings)

        assert prompt.render({"name": "Alice"}).rendered_prompt == "Alice"

    def test_trimming_can_be_disabled(self):
        """Test that trimming follows the render_trim_output setting."""
        prompt = PromptTemplate("  {{ name }}\n", settings=Settings(render_trim_output=False))

        assert prompt.render({"name": "Alice"}).rendered_prompt == "  Alice\n"

    def test_empty_template_raises(self, settings):
        """Test that an empty template is rejected at render time."""
        prompt = PromptTemplate("", settings=settings)

        with pytest.raises(ValueError, match="template cannot be empty"):
            prompt.render({"name": "Alice"})

    def test_parse_error_propagates(self, settings):
        """Test that template syntax errors surface as TemplateRenderError."""
        prompt = PromptTemplate("{% if %}", settings=settings)

        with pytest.raises(TemplateRenderError):
            prompt.render({})

    # =========================================================================
    # Variable Handling Tests
    # =========================================================================

    def test_none_values_are_dropped(self, settings):
        """Test that None values are treated as not supplied."""
        prompt = PromptTemplate("Hello {{ name }}! You are {{ age }} years old.", settings=settings)

        result = prompt.render({"name": "Alice", "age": None})

        assert result.rendered_prompt == "Hello Alice! You are  years old."
        assert result.missing_variables == ["age"]

    def test_no_variables(self, settings):
        """Test rendering when no variable bag is given."""
        prompt = PromptTemplate("Static prompt", settings=settings)

        result = prompt.render()

        assert result.rendered_prompt == "Static prompt"
        assert result.missing_variables == []

    def test_missing_variables_use_literal_names(self, settings):
        """Test that missing names match the extracted placeholder text."""
        prompt = PromptTemplate(
            "{% for var in variables %}{{ var.name }}{% endfor %}",
            settings=settings,
        )

        result = prompt.render({"variables": [{"name": "a"}, {"name": "b"}]})

        assert result.rendered_prompt == "ab"
        assert result.missing_variables == ["var.name"]

    def test_missing_variables_are_logged(self, settings, caplog):
        """Test that a warning lists the missing variables."""
        prompt = PromptTemplate("{{ name }} {{ role }}", settings=settings)

        with caplog.at_level(logging.WARNING):
            prompt.render({"name": "Alice"})

        assert "Template expects variables that are not provided: ['role']" in caplog.text

    def test_empty_output_is_logged(self, settings, caplog):
        """Test that an empty render logs a warning."""
        prompt = PromptTemplate("{% if flag %}shown{% endif %}", settings=settings)

        with caplog.at_level(logging.WARNING):
            result = prompt.render({})

        assert result.rendered_prompt == ""
        assert "Rendered output is empty" in caplog.text

    def test_delegates_to_renderer(self, settings):
        """Test that a custom renderer receives the filtered context."""
        renderer = Mock(spec=BaseTemplateRenderer)
        renderer.render.return_value = "  rendered  "
        prompt = PromptTemplate("{{ a }}", renderer=renderer, settings=settings)

        result = prompt.render({"a": 1, "b": None})

        renderer.render.assert_called_once_with("{{ a }}", {"a": 1})
        assert result.rendered_prompt == "rendered"

    # =========================================================================
    # Conditional Logic Tests
    # =========================================================================

    def test_experience_zero(self, settings):
        """Test the first-role branch."""
        prompt = PromptTemplate(EXPERIENCE_TEMPLATE, settings=settings)

        result = prompt.render(
            {"name": "Shiv", "company": "TIBCO", "role": "Developer", "experience": 0}
        )

        assert result.rendered_prompt == (
            "Hello Shiv! Welcome to TIBCO.\n"
            "Your role is Developer and welcome to your first professional role!"
        )

    @pytest.mark.parametrize("experience", [5, 5.0])
    def test_experience_five(self, settings, experience):
        """Test that floatformat:0 drops decimals."""
        prompt = PromptTemplate(EXPERIENCE_TEMPLATE, settings=settings)

        result = prompt.render(
            {"name": "Shiv", "company": "TIBCO", "role": "Developer", "experience": experience}
        )

        assert "well done on your 5 years of experience!" in result.rendered_prompt
        assert "5.0" not in result.rendered_prompt
        assert "appreciate" not in result.rendered_prompt

    def test_experience_ten(self, settings):
        """Test the milestone branch joined with or."""
        prompt = PromptTemplate(EXPERIENCE_TEMPLATE, settings=settings)

        result = prompt.render(
            {"name": "Shiv", "company": "TIBCO", "role": "Developer", "experience": 10}
        )

        assert "well done on your 10 years of experience!" in result.rendered_prompt
        assert (
            "We truly appreciate your significant contribution to the industry."
            in result.rendered_prompt
        )
        assert "10.000000" not in result.rendered_prompt

    @pytest.mark.parametrize(
        ("experience", "expected"),
        [
            ("0", "and welcome to your first professional role!"),
            ("5", "and well done on your 5 years of experience!"),
            ("10", "We truly appreciate your significant contribution to the industry."),
        ],
    )
    def test_experience_as_string(self, settings, experience, expected):
        """Test that string inputs, as typed by the schema, drive the conditionals."""
        prompt = PromptTemplate(EXPERIENCE_TEMPLATE, settings=settings)

        result = prompt.render(
            {"name": "Shiv", "company": "TIBCO", "role": "Developer", "experience": experience}
        )

        assert expected in result.rendered_prompt
        assert result.missing_variables == []

    def test_membership_in_string(self, settings):
        """Test the in operator against a comma-separated string."""
        prompt = PromptTemplate(
            '{% if experience in "10,15,20" %}milestone{% else %}regular{% endif %}',
            settings=settings,
        )

        assert prompt.render({"experience": 10}).rendered_prompt == "milestone"
        assert prompt.render({"experience": 7}).rendered_prompt == "regular"

    # =========================================================================
    # End-to-End Tests
    # =========================================================================

    def test_data_analysis_template(self, settings):
        """Test nested mappings, loops and forloop counters."""
        prompt = PromptTemplate(DATA_ANALYSIS_TEMPLATE, settings=settings)

        result = prompt.render(
            {
                "dataset_type": "customer behavior",
                "objective": "Identify factors influencing customer retention",
                "data_info": {"records": 150000, "columns": 23},
                "missing_percentage": 12000 / 150000 * 100,
                "variables": [
                    {
                        "name": "customer_tenure",
                        "type": "numeric",
                        "description": "months since first purchase",
                        "unique_values": None,
                    },
                    {
                        "name": "subscription_type",
                        "type": "categorical",
                        "description": "premium, standard, or basic",
                        "unique_values": 3,
                    },
                ],
                "hypotheses": [
                    "Customers with longer tenure have higher retention rates",
                    "Premium subscribers are more likely to be retained",
                ],
                "tasks": [
                    "Perform exploratory data analysis",
                    "Calculate retention rates by segment",
                ],
            }
        )
        rendered = result.rendered_prompt

        assert "customer behavior data" in rendered
        assert "Identify factors influencing customer retention" in rendered
        assert "Total records: 150000" in rendered
        assert "Columns: 23" in rendered
        assert "High percentage of missing data" not in rendered
        assert "- **customer_tenure** (numeric): months since first purchase\n" in rendered
        assert "(categorical): premium, standard, or basic - 3 unique values" in rendered
        assert "H1: Customers with longer tenure have higher retention rates" in rendered
        assert "H2: Premium subscribers are more likely to be retained" in rendered
        assert "1. Perform exploratory data analysis" in rendered
        assert "2. Calculate retention rates by segment" in rendered

    def test_user_analysis_template(self, settings):
        """Test a loop over key variables with string inputs."""
        template = """You are a {{ role }} working with {{ domain }} data.

**Analysis Objective:** {{ objective }}

- Total records: {{ total_records }}
- Missing data: {{ missing_percentage }}%

{% for variable in key_variables %}
**Key Variables:**
- **{{ variable.name }}** ({{ variable.type }}): {{ variable.description }}
{% endfor %}"""
        prompt = PromptTemplate(template, settings=settings)

        result = prompt.render(
            {
                "role": "senior data scientist",
                "domain": "e-commerce",
                "objective": "Analyze customer purchase patterns and predict churn risk",
                "total_records": "250000",
                "missing_percentage": "4.7",
                "key_variables": [
                    {
                        "name": "customer_lifetime_value",
                        "type": "numeric",
                        "description": "CLV calculated over 24 months",
                    },
                    {
                        "name": "last_purchase_days",
                        "type": "integer",
                        "description": "days since last purchase",
                    },
                ],
            }
        )
        rendered = result.rendered_prompt

        assert "senior data scientist" in rendered
        assert "e-commerce" in rendered
        assert "250000" in rendered
        assert "4.7%" in rendered
        assert "**customer_lifetime_value** (numeric): CLV calculated over 24 months" in rendered
        assert "last_purchase_days" in rendered
        assert rendered.count("**Key Variables:**") == 2
