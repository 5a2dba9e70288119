"""Static catalog of the AdvogaAI tools.

The catalog is built once at import time and never changes afterwards.
Declaration order matters: listings preserve it, and the order of each
tool's parameters decides which validation error is reported first.
"""

from typing import Dict, List, Optional, Union
from models.tools import (
    ParameterType,
    ParameterValidation,
    ToolCategory,
    ToolDefinition,
    ToolParameter,
)


def _param(name: str, type_: ParameterType, required: bool, description: str, enum=None) -> ToolParameter:
    validation = ParameterValidation(enum=tuple(enum)) if enum is not None else None
    return ToolParameter(
        name=name,
        type=type_,
        required=required,
        description=description,
        validation=validation,
    )


ADVOGAAI_TOOLS = (
    ToolDefinition(
        id="petition_generator",
        name="Gerador de Petições",
        description="Gera petições jurídicas com base em templates e dados do processo",
        category=ToolCategory.PETITION,
        version="1.0.0",
        endpoint="/api/tools/petition-generator",
        parameters=(
            _param("petition_type", ParameterType.STRING, True,
                   "Tipo de petição (inicial, contestacao, recurso, etc.)",
                   enum=["inicial", "contestacao", "recurso", "agravo", "embargos"]),
            _param("numero_cnj", ParameterType.STRING, False, "Número CNJ do processo"),
            _param("facts", ParameterType.OBJECT, True, "Fatos relevantes para a petição"),
            _param("legal_basis", ParameterType.ARRAY, False, "Base legal e jurisprudência"),
            _param("requests", ParameterType.ARRAY, True, "Pedidos a serem formulados"),
        ),
        response_format={
            "petition_text": "string",
            "legal_references": "array",
            "confidence_score": "number",
        },
    ),
    ToolDefinition(
        id="deadline_calculator",
        name="Calculadora de Prazos",
        description="Calcula prazos processuais considerando feriados e regras específicas",
        category=ToolCategory.CALCULATION,
        version="1.0.0",
        endpoint="/api/tools/deadline-calculator",
        parameters=(
            _param("event_date", ParameterType.STRING, True, "Data do evento inicial (formato ISO)"),
            _param("deadline_type", ParameterType.STRING, True, "Tipo de prazo",
                   enum=["contestacao", "recurso", "agravo", "embargos", "cumprimento"]),
            _param("court_type", ParameterType.STRING, True, "Tipo de tribunal",
                   enum=["federal", "estadual", "trabalhista", "superior"]),
            _param("consider_holidays", ParameterType.BOOLEAN, False,
                   "Considerar feriados nacionais e forenses"),
        ),
        response_format={
            "deadline_date": "string",
            "working_days": "number",
            "calendar_days": "number",
            "holidays_considered": "array",
        },
    ),
    ToolDefinition(
        id="case_analyzer",
        name="Analisador de Processos",
        description="Analisa processos e extrai insights importantes",
        category=ToolCategory.ANALYSIS,
        version="1.0.0",
        endpoint="/api/tools/case-analyzer",
        parameters=(
            _param("numero_cnj", ParameterType.STRING, True, "Número CNJ do processo"),
            _param("analysis_type", ParameterType.STRING, True, "Tipo de análise",
                   enum=["timeline", "risks", "strategy", "precedents"]),
            _param("include_movimentacoes", ParameterType.BOOLEAN, False,
                   "Incluir movimentações na análise"),
        ),
        response_format={
            "analysis_result": "object",
            "recommendations": "array",
            "risk_score": "number",
            "key_insights": "array",
        },
    ),
    ToolDefinition(
        id="jurisprudence_search",
        name="Busca de Jurisprudência",
        description="Busca jurisprudência relevante para o caso",
        category=ToolCategory.RESEARCH,
        version="1.0.0",
        endpoint="/api/tools/jurisprudence-search",
        parameters=(
            _param("keywords", ParameterType.ARRAY, True, "Palavras-chave para busca"),
            _param("court_level", ParameterType.STRING, False, "Nível do tribunal",
                   enum=["primeira_instancia", "segunda_instancia", "superior", "supremo"]),
            _param("date_range", ParameterType.OBJECT, False, "Período de busca (from/to)"),
            _param("max_results", ParameterType.NUMBER, False, "Número máximo de resultados"),
        ),
        response_format={
            "results": "array",
            "total_found": "number",
            "relevance_scores": "array",
        },
    ),
    ToolDefinition(
        id="document_classifier",
        name="Classificador de Documentos",
        description="Classifica e extrai informações de documentos jurídicos",
        category=ToolCategory.DOCUMENT,
        version="1.0.0",
        endpoint="/api/tools/document-classifier",
        parameters=(
            _param("document_content", ParameterType.STRING, True, "Conteúdo do documento"),
            _param("document_type_hint", ParameterType.STRING, False, "Dica sobre o tipo de documento"),
            _param("extract_entities", ParameterType.BOOLEAN, False, "Extrair entidades nomeadas"),
        ),
        response_format={
            "document_type": "string",
            "confidence": "number",
            "extracted_entities": "object",
            "key_information": "object",
        },
    ),
    ToolDefinition(
        id="timeline_generator",
        name="Gerador de Timeline",
        description="Gera timeline de eventos do processo",
        category=ToolCategory.TIMELINE,
        version="1.0.0",
        endpoint="/api/tools/timeline-generator",
        parameters=(
            _param("numero_cnj", ParameterType.STRING, True, "Número CNJ do processo"),
            _param("include_predictions", ParameterType.BOOLEAN, False,
                   "Incluir predições de próximos eventos"),
            _param("format", ParameterType.STRING, False, "Formato de saída",
                   enum=["json", "html", "pdf"]),
        ),
        response_format={
            "timeline_events": "array",
            "predictions": "array",
            "critical_dates": "array",
        },
    ),
)


def _index_by_id(tools) -> Dict[str, ToolDefinition]:
    index: Dict[str, ToolDefinition] = {}
    for tool in tools:
        if tool.id in index:
            raise ValueError(f"Duplicate tool id in catalog: {tool.id}")
        index[tool.id] = tool
    return index


_TOOLS_BY_ID = _index_by_id(ADVOGAAI_TOOLS)


def get_all_tools() -> List[ToolDefinition]:
    """All tools in declaration order."""
    return list(ADVOGAAI_TOOLS)


def get_tool_by_id(tool_id: str) -> Optional[ToolDefinition]:
    """Exact-match lookup. Returns None for unknown ids."""
    return _TOOLS_BY_ID.get(tool_id)


def get_tools_by_category(category: Union[ToolCategory, str]) -> List[ToolDefinition]:
    """Tools of one category, keeping declaration order."""
    try:
        category = ToolCategory(category)
    except ValueError:
        return []
    return [tool for tool in ADVOGAAI_TOOLS if tool.category == category]


def get_categories() -> List[ToolCategory]:
    """Distinct categories in order of first appearance."""
    categories: List[ToolCategory] = []
    for tool in ADVOGAAI_TOOLS:
        if tool.category not in categories:
            categories.append(tool.category)
    return categories
