"""
Unit tests for JSON-LD JobPosting extraction.
"""
from bs4 import BeautifulSoup

from pipeline.jsonld import apply_job_posting, find_job_posting, has_job_posting
from pipeline.models import JobOffer


def _soup(html):
    return BeautifulSoup(html, 'html.parser')


def _offer():
    return JobOffer(source_url="https://acme.example/jobs/42", source_domain="acme.example")


def test_find_job_posting_direct():
    soup = _soup('<script type="application/ld+json">{"@type": "JobPosting", "title": "Engineer"}</script>')
    assert find_job_posting(soup)["title"] == "Engineer"


def test_find_job_posting_in_array():
    soup = _soup("""<script type="application/ld+json">
    [{"@type": "WebSite"}, {"@type": "JobPosting", "title": "Designer"}]
    </script>""")
    assert find_job_posting(soup)["title"] == "Designer"


def test_find_job_posting_in_graph():
    soup = _soup("""<script type="application/ld+json">
    {"@graph": [{"@type": "BreadcrumbList"}, {"@type": "JobPosting", "title": "Analyst"}]}
    </script>""")
    assert find_job_posting(soup)["title"] == "Analyst"


def test_type_may_be_a_list():
    soup = _soup('<script type="application/ld+json">{"@type": ["JobPosting"], "title": "Engineer"}</script>')
    assert has_job_posting(soup)


def test_malformed_block_is_skipped():
    soup = _soup("""
    <script type="application/ld+json">{not json</script>
    <script type="application/ld+json">{"@type": "JobPosting", "title": "Engineer"}</script>
    """)
    assert find_job_posting(soup)["title"] == "Engineer"


def test_no_job_posting():
    soup = _soup('<script type="application/ld+json">{"@type": "Organization"}</script>')
    assert find_job_posting(soup) is None
    assert not has_job_posting(soup)


def test_apply_full_job_posting():
    data = {
        "@type": "JobPosting",
        "title": " Backend  Engineer ",
        "description": "<p>Build <strong>APIs</strong></p><ul><li>Python</li><li>Go</li></ul>",
        "hiringOrganization": {"@type": "Organization", "name": "Acme"},
        "jobLocation": {
            "@type": "Place",
            "address": {
                "addressLocality": "Paris",
                "addressRegion": "Île-de-France",
                "addressCountry": "FR",
            },
        },
        "employmentType": "FULL_TIME",
        "baseSalary": {
            "@type": "MonetaryAmount",
            "currency": "EUR",
            "value": {"@type": "QuantitativeValue", "minValue": 50000, "maxValue": 65000, "unitText": "YEAR"},
        },
        "datePosted": "2024-05-02",
        "skills": ["Python", "Go"],
    }
    offer = _offer()
    apply_job_posting(offer, data)

    assert offer.title == "Backend Engineer"
    assert offer.description == "Build **APIs**\n\n- Python\n- Go"
    assert offer.company == "Acme"
    assert offer.location == "Paris, Île-de-France, FR"
    assert offer.contract_type == "CDI"
    assert offer.salary.min == 50000
    assert offer.salary.max == 65000
    assert offer.salary.currency == "EUR"
    assert offer.salary.period == "year"
    assert offer.published_at == "2024-05-02"
    assert offer.skills == ["Python", "Go"]


def test_apply_lenient_job_posting():
    data = {
        "@type": "JobPosting",
        "title": "Designer",
        "description": "&lt;p&gt;Design &lt;em&gt;things&lt;/em&gt;&lt;/p&gt;",
        "hiringOrganization": "Acme",
        "jobLocation": [{"address": {"addressLocality": "Lyon", "addressCountry": {"name": "France"}}}],
        "baseSalary": {"value": "3,500", "unitText": "MONTH"},
        "skills": "Figma, Sketch , ",
    }
    offer = _offer()
    apply_job_posting(offer, data)

    assert offer.description == "Design *things*"
    assert offer.company == "Acme"
    assert offer.location == "Lyon, France"
    assert offer.salary.min == 3500
    assert offer.salary.max == 3500
    assert offer.salary.currency == "EUR"
    assert offer.salary.period == "month"
    assert offer.skills == ["Figma", "Sketch"]
    assert offer.contract_type is None


def test_apply_keeps_existing_fields():
    offer = _offer()
    offer.title = "From page"
    apply_job_posting(offer, {"@type": "JobPosting", "title": "From JSON-LD"})
    assert offer.title == "From page"
