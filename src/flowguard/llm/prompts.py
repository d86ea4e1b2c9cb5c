"""Prompt templates for narrative generation."""

import json

from flowguard.models import ProjectData


class PromptTemplates:
    """Collection of prompt templates for project risk analysis."""

    @staticmethod
    def project_risk_analysis(data: ProjectData, saturation_hint: str = "") -> str:
        """Generate prompt asking for insights and recommendations as JSON.

        Only counts are sent for commits, chat messages and budget items.

        Args:
            data: Project snapshot
            saturation_hint: Gate explanation to pass on to the model

        Returns:
            Formatted prompt
        """
        context = {
            "project_name": data.project_name,
            "release_date": data.release_date,
            "tasks": [t.model_dump(mode="json") for t in data.tasks],
            "messages": data.messages,
            "initial_features": data.initial_features,
            "current_features": data.current_features,
            "commit_count": len(data.commits),
            "chat_message_count": len(data.chat_messages),
            "budget_item_count": len(data.budget_items),
        }

        hint = f"IMPORTANT CONTEXT: {saturation_hint}\n" if saturation_hint else ""

        return f"""You are a senior release manager and project risk analyst.

Analyze this project and return ONLY valid JSON, no markdown, no explanation.

{hint}
Return exactly this schema:
{{
  "delay_risk_score": <0-100>,
  "waiting_score": <0-100>,
  "scope_drift_score": <0-100>,
  "scope_growth_percent": <number>,
  "deadline_extension_probability": <0-100>,
  "confidence": <"Low"|"Medium"|"High">,
  "insights": [<3 to 5 strings>],
  "recommendations": [<3 to 5 strings>]
}}

Project Data:
{json.dumps(context, indent=2)}

JSON only."""
