# tests/test_mermaid_utils.py
# Extraction, fallback and normalization of Mermaid code

import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from mermaid_utils import (
    MIN_DIAGRAM_LENGTH,
    extract_mermaid_block,
    fallback_diagram,
    llm_generate_mermaid,
    normalize_mermaid,
)

LONG_DIAGRAM = """graph TD;
    A[Boil Water] --> B[Add Salt];
    B --> C[Add Pasta];
    C --> D[Stir Occasionally];
    D --> E[Drain];"""


class TestExtractMermaidBlock:
    """Test pulling Mermaid code out of model output"""

    def test_fenced_block(self):
        """A fenced mermaid block is returned trimmed"""
        assert extract_mermaid_block("```mermaid\ngraph TD;\nA-->B\n```") == "graph TD;\nA-->B"

    def test_fenced_block_case_insensitive_with_prose(self):
        """Fence tag is case insensitive and prose around it is dropped"""
        response = "Sure! Here it is:\n```Mermaid\n  graph LR\n  X-->Y\n```\nEnjoy."
        assert extract_mermaid_block(response) == "graph LR\n  X-->Y"

    def test_only_first_fenced_block(self):
        """A second fenced block later in the text is ignored"""
        response = (
            "```mermaid\ngraph TD;\nA-->B\n```\n"
            "Alternative:\n```mermaid\ngraph LR;\nC-->D\n```"
        )
        assert extract_mermaid_block(response) == "graph TD;\nA-->B"

    def test_bare_graph_takes_rest_of_text(self):
        """A bare graph directive captures everything up to the end"""
        response = "<think>planning</think>\ngraph TD\nA-->B\nHope this helps"
        assert extract_mermaid_block(response) == "graph TD\nA-->B\nHope this helps"

    def test_bare_graph_requires_direction(self):
        """graph without a direction is not a diagram start"""
        assert extract_mermaid_block("this graph shows stuff") == ""

    def test_bare_flowchart(self):
        """flowchart is accepted when there is no graph directive"""
        response = "Answer:\nflowchart LR\n  X --> Y\n"
        assert extract_mermaid_block(response) == "flowchart LR\n  X --> Y"

    def test_graph_preferred_over_flowchart(self):
        """The graph strategy runs before the flowchart one"""
        response = "flowchart TB\nA-->B\ngraph LR\nC-->D"
        assert extract_mermaid_block(response) == "graph LR\nC-->D"

    def test_nothing_found(self):
        """Plain prose yields an empty string"""
        assert extract_mermaid_block("I cannot draw that, sorry.") == ""
        assert extract_mermaid_block("") == ""

    def test_non_string_input(self):
        """Non-string input yields an empty string"""
        assert extract_mermaid_block(None) == ""
        assert extract_mermaid_block(42) == ""


class TestFallbackDiagram:
    """Test the deterministic fallback diagrams"""

    @pytest.mark.parametrize("topic", ["", "pizza night", "Marketing plan", "quantum stuff", "  "])
    def test_always_starts_with_directive(self, topic):
        """Every fallback starts with a directive and direction"""
        assert fallback_diagram(topic).startswith("graph TD;\n")

    def test_cooking_chain(self):
        """Cooking topics get the cooking chain with the topic first"""
        diagram = fallback_diagram("Cooking pasta")
        assert "A[Cooking pasta] --> B[Gather Ingredients];" in diagram
        assert "F --> G[Serve & Enjoy];" in diagram

    def test_pizza_is_cooking(self):
        """pizza also selects the cooking chain and the topic is capitalized"""
        diagram = fallback_diagram("pizza night")
        assert "A[Pizza night]" in diagram
        assert "Follow Recipe Steps" in diagram

    def test_marketing_chain(self):
        """Marketing topics get the marketing chain"""
        diagram = fallback_diagram("marketing a podcast")
        assert "A[Marketing a podcast] --> B[Market Research];" in diagram
        assert "Optimize & Improve" in diagram

    def test_generic_chain(self):
        """Everything else gets the generic learning chain"""
        diagram = fallback_diagram("Rust lifetimes")
        lines = diagram.split("\n")
        assert len(lines) == 7
        assert "Understanding Basics" in diagram
        assert lines[-1].strip() == "F --> G[Continuous Improvement];"

    def test_deterministic(self):
        """Same topic, same diagram"""
        assert fallback_diagram("Chess openings") == fallback_diagram("Chess openings")

    def test_long_enough_to_not_trigger_itself(self):
        """Fallbacks are longer than the fallback threshold"""
        assert len(fallback_diagram("")) >= MIN_DIAGRAM_LENGTH


class TestNormalizeMermaid:
    """Test repairing Mermaid code before rendering"""

    def test_adds_missing_directive(self):
        """Bodies without a directive get graph TD;"""
        assert normalize_mermaid("A-->B") == "graph TD;\nA-->B"

    def test_word_starting_with_directive_is_not_directive(self):
        """graphics is not the graph keyword"""
        assert normalize_mermaid("graphics-->render").startswith("graph TD;\ngraphics")

    def test_terminates_directive(self):
        """The graph directive line gets a semicolon"""
        assert normalize_mermaid("graph TD\nA-->B") == "graph TD;\nA-->B"

    def test_directive_on_same_line_as_body(self):
        """Body on the directive line moves to its own line"""
        assert normalize_mermaid("graph LR A-->B") == "graph LR;\nA-->B"

    def test_flowchart_directive(self):
        """flowchart directives are terminated the same way"""
        assert normalize_mermaid("flowchart LR\nA-->B") == "flowchart LR;\nA-->B"

    def test_other_diagram_types_untouched(self):
        """Non-flowchart diagrams keep their header"""
        code = "sequenceDiagram\nAlice->>Bob: Hi"
        assert normalize_mermaid(code) == code

    def test_quotes_special_labels(self):
        """Labels with colon, degree sign or parenthesis are quoted"""
        code = "graph TD;\nA[Temp: 180°C] --> B[Bake (20 min)]\nB --> C[Oven at 200°]"
        assert normalize_mermaid(code) == (
            'graph TD;\nA["Temp: 180°C"] --> B["Bake (20 min)"]\nB --> C["Oven at 200°"]'
        )

    def test_plain_and_quoted_labels_untouched(self):
        """Safe labels and already quoted labels are left alone"""
        code = 'graph TD;\nA[Start] --> B["Step: one"]'
        assert normalize_mermaid(code) == code

    def test_inner_quotes_escaped(self):
        """Quotes inside a label being quoted become entities"""
        assert normalize_mermaid('graph TD;\nA[Say "hi": now]') == 'graph TD;\nA["Say #quot;hi#quot;: now"]'

    def test_collapses_blank_lines_and_semicolons(self):
        """Blank lines and repeated semicolons collapse to one"""
        code = "graph TD;\n\n\nA-->B;;\n   \nB-->C;;;"
        assert normalize_mermaid(code) == "graph TD;\nA-->B;\nB-->C;"

    def test_empty_input(self):
        """Empty or whitespace input stays empty"""
        assert normalize_mermaid("") == ""
        assert normalize_mermaid("   \n\t ") == ""
        assert normalize_mermaid(None) == ""

    def test_directive_only(self):
        """A bare directive is terminated"""
        assert normalize_mermaid("graph TD") == "graph TD;"

    @pytest.mark.parametrize("code", [
        "",
        "   \n ",
        "graph TD",
        "graph TD;",
        "graph td a-->b",
        "A-->B",
        "graph TD;;\n;A-->B",
        "graph TD;\n\n\nA[Temp: 180°C] --> B[Bake (20 min)];;\n\n",
        'graph TD;\nA["x: y"] --> B[Say "hi": now]',
        "flowchart LR\n  A[one] --> B[two (2)]\n\n  B --> C",
        "sequenceDiagram\nAlice->>Bob: Hi",
        "pie\n\"Dogs\" : 386",
        LONG_DIAGRAM,
        fallback_diagram("Baking: bread (sourdough)"),
    ])
    def test_idempotent(self, code):
        """Normalizing twice gives the same result as once"""
        once = normalize_mermaid(code)
        assert normalize_mermaid(once) == once

    def test_fallback_stays_valid(self):
        """Normalizing a fallback keeps the directive"""
        assert normalize_mermaid(fallback_diagram("Baking: bread (sourdough)")).startswith("graph TD;\n")


class TestLlmGenerateMermaid:
    """Test the topic to diagram pipeline with a fake generator"""

    def test_uses_extracted_diagram(self):
        """A long enough extracted diagram is returned as is"""
        raw = f"Here you go\n```mermaid\n{LONG_DIAGRAM}\n```"
        result = llm_generate_mermaid("Cooking pasta", generate=lambda s, u: raw)
        assert result["mermaid"] == LONG_DIAGRAM
        assert result["raw"] == raw
        assert result["topic"] == "Cooking pasta"
        assert result["category"] == "cooking"
        assert result["timestamp"].endswith("Z")

    def test_short_extraction_falls_back(self):
        """An extracted diagram below the threshold is replaced"""
        raw = "```mermaid\ngraph TD;\nA-->B\n```"
        result = llm_generate_mermaid("Cooking pasta", generate=lambda s, u: raw)
        assert result["mermaid"] == fallback_diagram("Cooking pasta")
        assert result["raw"] == raw

    def test_nothing_extracted_falls_back(self):
        """Prose only output is replaced by the fallback"""
        result = llm_generate_mermaid("Chess openings", generate=lambda s, u: "No idea.")
        assert result["mermaid"] == fallback_diagram("Chess openings")
        assert result["category"] is None

    def test_threshold_is_overridable(self):
        """A lower threshold keeps short diagrams"""
        raw = "```mermaid\ngraph TD;\nA-->B\n```"
        result = llm_generate_mermaid("Chess", generate=lambda s, u: raw, min_length=5)
        assert result["mermaid"] == "graph TD;\nA-->B"

    def test_generator_receives_prompts(self):
        """The generator gets the system and user prompts for the topic"""
        seen = {}
        def fake_generate(system_text, user_text):
            seen["system"] = system_text
            seen["user"] = user_text
            return ""
        llm_generate_mermaid("Cooking pasta", generate=fake_generate)
        assert "```mermaid" in seen["system"]
        assert '"Cooking pasta"' in seen["user"]
