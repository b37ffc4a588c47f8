"""
Pytest configuration for Pedagogy Engine tests.

Provides shared fixtures for unit tests and BDD step definitions.
"""

import pytest

from pedagogy_engine import (
    BloomLevel,
    CurriculumService,
    DomainService,
    EngineSettings,
    InMemoryLearnerStorage,
    InMemorySkillGraphStorage,
    LearnerGroup,
    LearnerSkillMap,
    Skill,
    SkillEdge,
    SkillGraph,
    TensionService,
)
from pedagogy_engine.core import PrerequisiteIndex


def make_graph(domain, skills, edges):
    """Build a graph from (id, label, level) tuples and (source, target) pairs."""
    return SkillGraph(
        domain=domain,
        skills=[Skill(id=sid, label=label, bloom_level=level) for sid, label, level in skills],
        edges=[SkillEdge(source=source, target=target) for source, target in edges],
    )


def make_chain(domain, length):
    """A single prerequisite chain s-0 -> s-1 -> ... -> s-(length-1)."""
    ids = [f"s-{n}" for n in range(length)]
    return make_graph(
        domain,
        [(sid, f"Step {sid}", BloomLevel.APPLICATION) for sid in ids],
        list(zip(ids, ids[1:])),
    )


DATA_SCIENCE_SKILLS = [
    ("python-basics", "Write basic Python", BloomLevel.KNOWLEDGE),
    ("explain-dataframes", "Explain what a DataFrame is", BloomLevel.COMPREHENSION),
    ("install-packages", "Install Python packages", BloomLevel.APPLICATION),
    ("jupyter-notebooks", "Use Jupyter notebooks", BloomLevel.APPLICATION),
    ("load-csv", "Load a CSV into a DataFrame", BloomLevel.APPLICATION),
    ("select-filter-data", "Select and filter data", BloomLevel.APPLICATION),
    ("plotting-basics", "Create basic plots", BloomLevel.APPLICATION),
    ("pandas-groupby", "Group and aggregate with pandas", BloomLevel.ANALYSIS),
    ("data-cleaning", "Clean messy data", BloomLevel.ANALYSIS),
    ("exploratory-analysis", "Conduct an exploratory analysis", BloomLevel.SYNTHESIS),
    ("evaluate-model", "Evaluate a predictive model", BloomLevel.EVALUATION),
    ("call-weather-api", "Fetch data from a weather API", BloomLevel.APPLICATION),
]

DATA_SCIENCE_EDGES = [
    ("python-basics", "explain-dataframes"),
    ("python-basics", "install-packages"),
    ("python-basics", "jupyter-notebooks"),
    ("install-packages", "load-csv"),
    ("load-csv", "select-filter-data"),
    ("select-filter-data", "pandas-groupby"),
    ("select-filter-data", "plotting-basics"),
    ("load-csv", "data-cleaning"),
    ("pandas-groupby", "exploratory-analysis"),
    ("plotting-basics", "exploratory-analysis"),
    ("data-cleaning", "exploratory-analysis"),
    ("exploratory-analysis", "evaluate-model"),
    ("python-basics", "call-weather-api"),
]

# Only Ana has recorded select-filter-data; Eli is weak on python-basics.
COHORT_A = [
    LearnerSkillMap(learner_id="ana", name="Ana", skills={
        "python-basics": 0.9, "install-packages": 0.8, "load-csv": 0.8,
        "select-filter-data": 0.7, "jupyter-notebooks": 0.9,
    }),
    LearnerSkillMap(learner_id="ben", name="Ben", skills={
        "python-basics": 0.85, "install-packages": 0.7, "load-csv": 0.6,
    }),
    LearnerSkillMap(learner_id="chen", name="Chen", skills={
        "python-basics": 0.8, "install-packages": 0.75, "load-csv": 0.55,
    }),
    LearnerSkillMap(learner_id="dee", name="Dee", skills={
        "python-basics": 0.9, "install-packages": 0.9, "load-csv": 0.7,
    }),
    LearnerSkillMap(learner_id="eli", name="Eli", skills={
        "python-basics": 0.4, "install-packages": 0.6,
    }),
]

WORKSHOP_TASKS = [f"task-{n}" for n in range(1, 10)]


@pytest.fixture
def settings():
    """Default engine settings."""
    return EngineSettings()


@pytest.fixture
def data_science_graph():
    return make_graph("data-science", DATA_SCIENCE_SKILLS, DATA_SCIENCE_EDGES)


@pytest.fixture
def workshop_graph():
    """Nine independent application-level skills."""
    return make_graph(
        "workshop",
        [(task, f"Complete {task}", BloomLevel.APPLICATION) for task in WORKSHOP_TASKS],
        [],
    )


@pytest.fixture
def index(data_science_graph):
    return PrerequisiteIndex(data_science_graph)


@pytest.fixture
def cohort_a():
    return list(COHORT_A)


@pytest.fixture
def graph_storage(data_science_graph, workshop_graph):
    """Graph storage holding the data-science and workshop domains."""
    return InMemorySkillGraphStorage([data_science_graph, workshop_graph])


@pytest.fixture
def learner_storage(cohort_a):
    """Learner storage with cohort-a (five learners) and an empty newcomers group."""
    storage = InMemoryLearnerStorage()
    for learner in cohort_a:
        storage.add_learner(learner, group="cohort-a")
    storage.add_group(LearnerGroup(name="newcomers", domain="workshop"))
    return storage


@pytest.fixture
def tension_service(graph_storage, learner_storage, settings):
    return TensionService(graph_storage, learner_storage, settings=settings)


@pytest.fixture
def curriculum_service(graph_storage, learner_storage, settings):
    return CurriculumService(graph_storage, learner_storage, settings=settings)


@pytest.fixture
def domain_service(graph_storage):
    return DomainService(graph_storage)
