from __future__ import annotations

from fastapi import APIRouter, HTTPException

from app.schemas import QuestionLayerOut, QuestionnaireOut, QuestionOut
from app.services.questionnaire import LAYER_COUNT, RESPONSE_SCALE, QuestionLayer, get_layer, list_layers

router = APIRouter(prefix="/questionnaire", tags=["questionnaire"])


@router.get("", response_model=QuestionnaireOut)
def get_questionnaire() -> QuestionnaireOut:
    return QuestionnaireOut(
        layer_count=LAYER_COUNT,
        response_scale=dict(RESPONSE_SCALE),
        layers=[_to_layer_out(layer) for layer in list_layers()],
    )


@router.get("/layers/{layer_number}", response_model=QuestionLayerOut)
def get_questionnaire_layer(layer_number: int) -> QuestionLayerOut:
    layer = get_layer(layer_number)
    if not layer:
        raise HTTPException(status_code=404, detail="Layer not found")
    return _to_layer_out(layer)


def _to_layer_out(layer: QuestionLayer) -> QuestionLayerOut:
    return QuestionLayerOut(
        number=layer.number,
        title=layer.title,
        description=layer.description,
        is_open_ended=layer.is_open_ended,
        questions=[
            QuestionOut(id=question.id, text=question.text, category=question.category)
            for question in layer.questions
        ],
    )
