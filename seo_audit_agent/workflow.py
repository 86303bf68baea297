from __future__ import annotations

from typing import TypedDict

from langgraph.graph import END, StateGraph

from seo_audit_agent.aggregation import collect_signals
from seo_audit_agent.clients.gemini_client import GeminiClient
from seo_audit_agent.clients.moz_client import MozClient
from seo_audit_agent.clients.serpapi_client import SerpApiClient
from seo_audit_agent.config import AgentConfig
from seo_audit_agent.models import AnalysisReport, AnalysisResponse, CombinedSignal
from seo_audit_agent.prompting import build_analysis_prompt
from seo_audit_agent.report_parser import parse_analysis_report


class WorkflowState(TypedDict, total=False):
    url: str
    config: AgentConfig

    signal: CombinedSignal
    prompt: str
    raw_text: str
    report: AnalysisReport
    response: AnalysisResponse


def build_search_client(config: AgentConfig) -> SerpApiClient:
    return SerpApiClient(
        api_key=config.serpapi_key,
        endpoint=config.serpapi_endpoint,
        engine=config.serpapi_engine,
        num_results=config.serpapi_num_results,
        timeout_sec=config.http_timeout_sec,
    )


def build_authority_client(config: AgentConfig) -> MozClient:
    return MozClient(
        api_base64=config.moz_api_base64,
        endpoint=config.moz_endpoint,
        timeout_sec=config.http_timeout_sec,
    )


def build_analysis_client(config: AgentConfig) -> GeminiClient:
    return GeminiClient(
        api_key=config.gemini_api_key,
        model=config.gemini_model,
        api_base_url=config.gemini_api_base_url,
        temperature=config.gemini_temperature,
        json_mode=config.gemini_json_mode,
        timeout_sec=config.http_timeout_sec,
    )


def collect_signals_node(state: WorkflowState) -> WorkflowState:
    config = state["config"]
    signal = collect_signals(
        state["url"],
        build_search_client(config),
        build_authority_client(config),
    )
    return {"signal": signal}


def build_prompt_node(state: WorkflowState) -> WorkflowState:
    return {"prompt": build_analysis_prompt(state["url"], state["signal"])}


def generate_analysis_node(state: WorkflowState) -> WorkflowState:
    print("Analyzing data with Gemini...")
    client = build_analysis_client(state["config"])
    return {"raw_text": client.analyze(state["prompt"])}


def parse_report_node(state: WorkflowState) -> WorkflowState:
    return {"report": parse_analysis_report(state["raw_text"])}


def assemble_response_node(state: WorkflowState) -> WorkflowState:
    response = AnalysisResponse(
        analysis=state["report"],
        authority=state["signal"].authority,
    )
    print("Report generated successfully!")
    return {"response": response}


def build_workflow_app():
    workflow = StateGraph(WorkflowState)
    workflow.add_node("collect_signals", collect_signals_node)
    workflow.add_node("build_prompt", build_prompt_node)
    workflow.add_node("generate_analysis", generate_analysis_node)
    workflow.add_node("parse_report", parse_report_node)
    workflow.add_node("assemble_response", assemble_response_node)

    workflow.set_entry_point("collect_signals")
    workflow.add_edge("collect_signals", "build_prompt")
    workflow.add_edge("build_prompt", "generate_analysis")
    workflow.add_edge("generate_analysis", "parse_report")
    workflow.add_edge("parse_report", "assemble_response")
    workflow.add_edge("assemble_response", END)

    return workflow.compile()


def run_analysis_workflow(url: str, config: AgentConfig) -> WorkflowState:
    app = build_workflow_app()
    return app.invoke({"url": url, "config": config})


def run_analysis(url: str, config: AgentConfig) -> AnalysisResponse:
    """Run the full pipeline for one URL.

    Raises ``UpstreamError`` or ``ParseError`` from the generation stages.
    Source failures never raise; they degrade to fallback signals.
    """
    final_state = run_analysis_workflow(url, config)
    return final_state["response"]
