from destcompare.document import ArticleDocument, cell_text
from tests.helpers import article, heading, legacy_heading, wikitable


def test_cell_text_puts_line_breaks_and_list_items_on_their_own_lines():
    document = ArticleDocument.from_html(
        "<table class='wikitable'><tr><td>Berlin<br>  Geneva <ul><li>Milan</li><li>Rome</li></ul></td></tr></table>"
    )
    cell = document.soup.find("td")

    assert cell_text(cell) == "Berlin\nGeneva\nMilan\nRome"


def test_cell_text_ignores_comments():
    document = ArticleDocument.from_html("<table><tr><td>Oslo<!-- hidden note --></td></tr></table>")

    assert cell_text(document.soup.find("td")) == "Oslo"


def test_headings_unwrap_mediawiki_wrappers():
    document = ArticleDocument.from_html(article(heading(2, "Airlines and destinations"), heading(3, "Passenger")))

    headings = document.headings()

    assert [(h.level, h.text) for h in headings] == [(2, "Airlines and destinations"), (3, "Passenger")]
    assert headings[0].node.name == "div"


def test_legacy_headings_are_their_own_block():
    document = ArticleDocument.from_html(article(legacy_heading(3, "Passenger")))

    (only,) = document.headings()

    assert only.node.name == "h3"
    assert only.contains("passenger")


def test_table_rows_only_count_td_cells():
    document = ArticleDocument.from_html(article(wikitable([("Aegean Airlines", "Athens")], caption="Passenger")))

    (table,) = document.tables()

    assert table.caption == "Passenger"
    assert table.rows[0] == []
    assert table.rows[1][:2] == ["Aegean Airlines", "Athens"]


def test_nested_table_rows_are_not_attributed_to_the_outer_table():
    inner = wikitable([("Inner Air", "Nowhere")])
    document = ArticleDocument.from_html(
        f"<table class='wikitable'><tr><th>A</th></tr><tr><td>Outer Air</td><td>{inner}</td></tr></table>"
    )

    outer = document.tables()[0]

    assert [row[0] for row in outer.rows if row] == ["Outer Air"]


def test_preceding_heading_looks_back_a_limited_number_of_siblings():
    near = ArticleDocument.from_html(article(heading(3, "Passenger"), "<p>1</p>" * 4, wikitable([])))
    far = ArticleDocument.from_html(article(heading(3, "Passenger"), "<p>1</p>" * 5, wikitable([])))

    assert near.tables()[0].preceding_heading().text == "Passenger"
    assert far.tables()[0].preceding_heading() is None


def test_section_nodes_stop_at_next_heading():
    document = ArticleDocument.from_html(
        article(heading(3, "Passenger"), "<p>intro</p>", wikitable([]), heading(3, "Cargo"), wikitable([]))
    )
    passenger = document.headings()[0]

    names = [node.name for node in passenger.section_nodes()]

    assert names == ["p", "table"]


def test_garbage_input_yields_empty_document():
    for html in (None, "", "<table", "not html at all <<<>>>"):
        document = ArticleDocument.from_html(html)
        assert document.tables() == []
        assert document.headings() == []
