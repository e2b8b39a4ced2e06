"""Trip planner — budget-constrained itinerary generation.

Modules:
    config              Budget tiers, allocation shares, LLM and retry parameters
    errors              Planner error hierarchy surfaced by the API
    budget_parser       Budget label / custom range → spend window
    prompt_builder      Generation and chat-modification prompts
    gemini_client       generateContent transport with 503 backoff
    plan_extractor      JSON extraction and TripPlan validation
    budget_reconciler   Rescales breakdowns that miss the budget window
    fallback_planner    Deterministic itinerary for unusable model output
    generator           The generation pipeline
    modifier            Chat-driven plan edits

Pipeline:
    parse_budget_range → build_generation_prompt → GeminiClient.generate
    → parse_plan → BudgetReconciler.reconcile
    → FallbackPlanner.build (on any Rejected)
"""
