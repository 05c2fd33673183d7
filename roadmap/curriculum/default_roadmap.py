"""Built-in six-month roadmap: web developer to AI engineer.

November 2025 to April 2026. Two tracks of three months each, four
weeks per month (Monday to Sunday). Every week carries the daily
one-hour C++ DSA practice as its last goal.
"""

DSA_GOAL = "1 hour/day of C++ DSA practice (log problems in the journal)"

DEFAULT_ROADMAP = {
    "title": "6-Month Journey to AI Engineer",
    "tracks": [
        {
            "id": "ai-engineering",
            "title": "AI Engineering Foundations",
            "description": "Python, FastAPI, LLM APIs, embeddings and RAG with LlamaIndex",
            "months": [
                {
                    "title": "Month 1 - November: Python for AI",
                    "weeks": [
                        {
                            "id": "m1-w1",
                            "title": "Modern Python refresher",
                            "start_date": "2025-11-03",
                            "end_date": "2025-11-09",
                            "goals": [
                                "Type hints, dataclasses and pathlib",
                                "Virtual environments and dependency management",
                                "Write a small CLI with argparse",
                                DSA_GOAL,
                            ],
                        },
                        {
                            "id": "m1-w2",
                            "title": "Async Python",
                            "start_date": "2025-11-10",
                            "end_date": "2025-11-16",
                            "goals": [
                                "asyncio event loop, tasks and gather",
                                "Async HTTP calls with timeouts",
                                "Build an async web scraper",
                                DSA_GOAL,
                            ],
                        },
                        {
                            "id": "m1-w3",
                            "title": "Data handling",
                            "start_date": "2025-11-17",
                            "end_date": "2025-11-23",
                            "goals": [
                                "NumPy arrays and vectorized math",
                                "pandas for cleaning tabular data",
                                "Pydantic models for validation",
                                DSA_GOAL,
                            ],
                        },
                        {
                            "id": "m1-w4",
                            "title": "Testing and tooling",
                            "start_date": "2025-11-24",
                            "end_date": "2025-11-30",
                            "goals": [
                                "pytest fixtures and parametrization",
                                "Mocking external services",
                                "Set up linting and CI",
                                DSA_GOAL,
                            ],
                        },
                    ],
                },
                {
                    "title": "Month 2 - December: APIs and LLM basics",
                    "weeks": [
                        {
                            "id": "m2-w1",
                            "title": "FastAPI fundamentals",
                            "start_date": "2025-12-01",
                            "end_date": "2025-12-07",
                            "goals": [
                                "Routes, path and query parameters",
                                "Request and response models",
                                "Dependency injection",
                                DSA_GOAL,
                            ],
                        },
                        {
                            "id": "m2-w2",
                            "title": "FastAPI in practice",
                            "start_date": "2025-12-08",
                            "end_date": "2025-12-14",
                            "goals": [
                                "Database access with SQLAlchemy",
                                "Authentication with JWT",
                                "Background tasks and streaming responses",
                                DSA_GOAL,
                            ],
                        },
                        {
                            "id": "m2-w3",
                            "title": "LLM APIs",
                            "start_date": "2025-12-15",
                            "end_date": "2025-12-21",
                            "goals": [
                                "Chat completions and token budgets",
                                "Prompt engineering patterns",
                                "Structured output with JSON schemas",
                                DSA_GOAL,
                            ],
                        },
                        {
                            "id": "m2-w4",
                            "title": "LLM application patterns",
                            "start_date": "2025-12-22",
                            "end_date": "2025-12-28",
                            "goals": [
                                "Tool calling and function execution",
                                "Conversation memory",
                                "Build a chat API on FastAPI",
                                DSA_GOAL,
                            ],
                        },
                    ],
                },
                {
                    "title": "Month 3 - January: Retrieval-augmented generation",
                    "weeks": [
                        {
                            "id": "m3-w1",
                            "title": "Embeddings and vector search",
                            "start_date": "2025-12-29",
                            "end_date": "2026-01-04",
                            "goals": [
                                "Text embeddings and cosine similarity",
                                "Chunking strategies",
                                "Store vectors in pgvector",
                                DSA_GOAL,
                            ],
                        },
                        {
                            "id": "m3-w2",
                            "title": "LlamaIndex",
                            "start_date": "2026-01-05",
                            "end_date": "2026-01-11",
                            "goals": [
                                "Documents, nodes and indexes",
                                "Query engines and retrievers",
                                "Index a personal document set",
                                DSA_GOAL,
                            ],
                        },
                        {
                            "id": "m3-w3",
                            "title": "Advanced RAG",
                            "start_date": "2026-01-12",
                            "end_date": "2026-01-18",
                            "goals": [
                                "Hybrid search and reranking",
                                "Metadata filters",
                                "Citations in answers",
                                DSA_GOAL,
                            ],
                        },
                        {
                            "id": "m3-w4",
                            "title": "Evaluating RAG",
                            "start_date": "2026-01-19",
                            "end_date": "2026-01-25",
                            "goals": [
                                "Build an evaluation dataset",
                                "Measure faithfulness and relevance",
                                "Tune retrieval from the results",
                                DSA_GOAL,
                            ],
                        },
                    ],
                },
            ],
        },
        {
            "id": "ship-and-hire",
            "title": "Build, Ship and Get Hired",
            "description": "One killer project, deployed live, and interview readiness",
            "months": [
                {
                    "title": "Month 4 - February: The killer project",
                    "weeks": [
                        {
                            "id": "m4-w1",
                            "title": "Project design",
                            "start_date": "2026-01-26",
                            "end_date": "2026-02-01",
                            "goals": [
                                "Pick a problem worth solving",
                                "Write the architecture document",
                                "Set up the repository and CI",
                                DSA_GOAL,
                            ],
                        },
                        {
                            "id": "m4-w2",
                            "title": "Ingestion pipeline",
                            "start_date": "2026-02-02",
                            "end_date": "2026-02-08",
                            "goals": [
                                "Document loaders for the project sources",
                                "Chunk, embed and index",
                                "Incremental re-indexing",
                                DSA_GOAL,
                            ],
                        },
                        {
                            "id": "m4-w3",
                            "title": "Query API",
                            "start_date": "2026-02-09",
                            "end_date": "2026-02-15",
                            "goals": [
                                "FastAPI endpoints for questions",
                                "Streaming answers",
                                "Rate limiting and caching",
                                DSA_GOAL,
                            ],
                        },
                        {
                            "id": "m4-w4",
                            "title": "Frontend",
                            "start_date": "2026-02-16",
                            "end_date": "2026-02-22",
                            "goals": [
                                "Chat interface",
                                "Source citations view",
                                "Authentication",
                                DSA_GOAL,
                            ],
                        },
                    ],
                },
                {
                    "title": "Month 5 - March: Production",
                    "weeks": [
                        {
                            "id": "m5-w1",
                            "title": "Containers",
                            "start_date": "2026-02-23",
                            "end_date": "2026-03-01",
                            "goals": [
                                "Dockerize the API",
                                "docker compose for local stack",
                                "Environment configuration",
                                DSA_GOAL,
                            ],
                        },
                        {
                            "id": "m5-w2",
                            "title": "Deployment",
                            "start_date": "2026-03-02",
                            "end_date": "2026-03-08",
                            "goals": [
                                "Deploy to a cloud host",
                                "Custom domain and HTTPS",
                                "Continuous deployment",
                                DSA_GOAL,
                            ],
                        },
                        {
                            "id": "m5-w3",
                            "title": "Observability",
                            "start_date": "2026-03-09",
                            "end_date": "2026-03-15",
                            "goals": [
                                "Structured logging",
                                "Trace LLM calls and costs",
                                "Uptime alerts",
                                DSA_GOAL,
                            ],
                        },
                        {
                            "id": "m5-w4",
                            "title": "Polish",
                            "start_date": "2026-03-16",
                            "end_date": "2026-03-22",
                            "goals": [
                                "README with architecture diagram",
                                "Record a demo video",
                                "Collect feedback from five users",
                                DSA_GOAL,
                            ],
                        },
                    ],
                },
                {
                    "title": "Month 6 - April: Job hunt",
                    "weeks": [
                        {
                            "id": "m6-w1",
                            "title": "Resume and portfolio",
                            "start_date": "2026-03-23",
                            "end_date": "2026-03-29",
                            "goals": [
                                "Rewrite the resume around the project",
                                "Update LinkedIn and GitHub profile",
                                "Publish a write-up of the project",
                                DSA_GOAL,
                            ],
                        },
                        {
                            "id": "m6-w2",
                            "title": "Applications",
                            "start_date": "2026-03-30",
                            "end_date": "2026-04-05",
                            "goals": [
                                "Shortlist 30 companies",
                                "Send 10 tailored applications",
                                "Ask for 3 referrals",
                                DSA_GOAL,
                            ],
                        },
                        {
                            "id": "m6-w3",
                            "title": "Interview preparation",
                            "start_date": "2026-04-06",
                            "end_date": "2026-04-12",
                            "goals": [
                                "System design for LLM applications",
                                "Mock interviews",
                                "Behavioural stories",
                                DSA_GOAL,
                            ],
                        },
                        {
                            "id": "m6-w4",
                            "title": "Offers",
                            "start_date": "2026-04-13",
                            "end_date": "2026-04-19",
                            "goals": [
                                "Follow up on every application",
                                "Negotiate offers",
                                "Land the AI Engineer role",
                                DSA_GOAL,
                            ],
                        },
                    ],
                },
            ],
        },
    ],
}
