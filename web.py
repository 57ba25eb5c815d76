"""Web interface for the humanize-diff pipeline."""

import logging
from typing import List, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from humanize_diff import __version__
from humanize_diff.config import HumanizerConfig
from humanize_diff.errors import InvalidInputError
from humanize_diff.fallback import GenerativeRewrite
from humanize_diff.pipeline import HumanizePipeline
from humanize_diff.text.interjections import Intensity

logger = logging.getLogger(__name__)


class TextRequest(BaseModel):
    """Request model for text humanization."""

    text: str
    intensity: str = Intensity.BALANCED.value


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SegmentModel(CamelModel):
    kind: str
    original_text: str
    final_text: str


class CoverageModel(CamelModel):
    matched_phrase_count: int
    total_word_count: int
    coverage_ratio: float


class HumanizeResponse(CamelModel):
    """Response model: final text, diff segments and coverage."""

    final_text: str
    segments: List[SegmentModel]
    coverage: CoverageModel
    used_fallback: bool
    rewritten_text: str
    intensity: str
    warnings: List[str] = []


INDEX_HTML = """
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Humanize Diff</title>
    <style>
        * { margin: 0; padding: 0; box-sizing: border-box; }
        body {
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
            min-height: 100vh;
            display: flex;
            justify-content: center;
            align-items: center;
            padding: 20px;
        }
        .container {
            background: white;
            border-radius: 16px;
            box-shadow: 0 20px 60px rgba(0, 0, 0, 0.3);
            max-width: 900px;
            width: 100%;
            padding: 40px;
        }
        h1 { color: #333; margin-bottom: 24px; }
        textarea {
            width: 100%;
            min-height: 180px;
            padding: 16px;
            border: 2px solid #e0e0e0;
            border-radius: 8px;
            font: inherit;
            resize: vertical;
        }
        .controls { display: flex; gap: 12px; margin: 16px 0; }
        select, button { padding: 12px 20px; border-radius: 8px; font-size: 1em; }
        button {
            flex: 1;
            border: none;
            color: white;
            font-weight: 600;
            cursor: pointer;
            background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
        }
        button:disabled { opacity: 0.6; cursor: not-allowed; }
        #diff { line-height: 1.7; white-space: pre-wrap; margin-top: 16px; }
        #diff del { background: #fdd; color: #a33; }
        #diff ins { background: #dfd; color: #262; text-decoration: none; }
        #stats { color: #999; font-size: 0.9em; margin-top: 12px; }
        .error { color: #c33; margin-top: 12px; }
    </style>
</head>
<body>
    <div class="container">
        <h1>Humanize Diff</h1>
        <form id="humanize-form">
            <textarea id="input-text" placeholder="Paste or type your text here..."></textarea>
            <div class="controls">
                <select id="intensity">
                    <option value="light">Light</option>
                    <option value="balanced" selected>Balanced</option>
                    <option value="heavy">Heavy</option>
                </select>
                <button type="submit" id="humanize-btn">Humanize Text</button>
            </div>
        </form>
        <div class="error" id="error-message"></div>
        <div id="diff"></div>
        <div id="stats"></div>
    </div>

    <script>
        const form = document.getElementById('humanize-form');
        const diff = document.getElementById('diff');
        const stats = document.getElementById('stats');
        const errorMsg = document.getElementById('error-message');
        const button = document.getElementById('humanize-btn');

        function piece(tag, text) {
            const el = document.createElement(tag);
            el.textContent = text;
            return el;
        }

        form.addEventListener('submit', async (e) => {
            e.preventDefault();
            const text = document.getElementById('input-text').value;
            const intensity = document.getElementById('intensity').value;
            errorMsg.textContent = '';
            diff.replaceChildren();
            stats.textContent = '';
            button.disabled = true;

            try {
                const response = await fetch('/api/humanize', {
                    method: 'POST',
                    headers: { 'Content-Type': 'application/json' },
                    body: JSON.stringify({ text, intensity }),
                });
                const data = await response.json();
                if (!response.ok) {
                    throw new Error(typeof data.detail === 'string' ? data.detail : 'Failed to humanize text');
                }
                for (const segment of data.segments) {
                    if (segment.kind === 'equal') {
                        diff.append(piece('span', segment.finalText));
                    } else {
                        if (segment.originalText) diff.append(piece('del', segment.originalText));
                        if (segment.finalText) diff.append(piece('ins', segment.finalText));
                    }
                }
                stats.textContent = (data.coverage.coverageRatio * 100).toFixed(1)
                    + '% coverage' + (data.usedFallback ? ', generative rewrite used' : '');
            } catch (err) {
                errorMsg.textContent = err.message || 'An error occurred while processing your text.';
            } finally {
                button.disabled = false;
            }
        });
    </script>
</body>
</html>
"""


def create_app(
    generative_rewrite: Optional[GenerativeRewrite] = None,
    config: Optional[HumanizerConfig] = None,
) -> FastAPI:
    """Build the web app around one shared pipeline.

    Args:
        generative_rewrite: Async collaborator used when coverage is low
        config: Pipeline configuration; read from the environment if omitted

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="Humanize Diff",
        description="Rule-based text humanization with an aligned diff",
        version=__version__,
    )
    app.state.pipeline = HumanizePipeline.from_config(config or HumanizerConfig.load())
    app.state.generative_rewrite = generative_rewrite

    @app.get("/", response_class=HTMLResponse)
    async def root():
        """Serve the main web interface."""
        return INDEX_HTML

    @app.post("/api/humanize", response_model=HumanizeResponse)
    async def humanize_text(body: TextRequest, request: Request):
        """Humanize the provided text and return the diff."""
        pipeline: HumanizePipeline = request.app.state.pipeline
        try:
            result = await pipeline.run(
                body.text, body.intensity, request.app.state.generative_rewrite
            )
        except InvalidInputError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e
        if result.warnings:
            logger.warning("Degraded humanize result: %s", "; ".join(result.warnings))
        return HumanizeResponse.model_validate(result.to_dict())

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=logging.INFO)
    uvicorn.run(app, host="0.0.0.0", port=8000)
