import logging
from typing import Dict, Optional, Tuple, Union

from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator

logger = logging.getLogger(__name__)

QuestionId = Union[int, str]


class Question(BaseModel):
    """
    객관식 문제 모델 (세션 동안 불변)
    Pydantic v2 적용
    """
    id: QuestionId = Field(
        ...,
        description="문제 식별자 (세션 내 고유)"
    )
    question: str = Field(
        ...,
        min_length=1,
        description="발문"
    )
    code: Optional[str] = Field(
        None,
        description="코드 스니펫 원문 (없으면 None)"
    )
    options: Dict[str, str] = Field(
        ...,
        description="보기. key: 보기 키(A, B, ...), value: 표시 문구. 삽입 순서 = 표시 순서"
    )
    correct_answer: str = Field(
        ...,
        validation_alias=AliasChoices("correct_answer", "answer"),
        description="정답 보기 키. 리소스의 'answer' 표기도 입력으로만 허용"
    )

    model_config = {"frozen": True}

    @field_validator('options', mode='before')
    @classmethod
    def coerce_option_text(cls, v):
        """C 출력 문제의 보기는 숫자로 적히는 경우가 많다 ({"A": 10}). 표시 문구로 변환."""
        if isinstance(v, dict):
            return {
                key: str(text) if isinstance(text, (int, float)) and not isinstance(text, bool) else text
                for key, text in v.items()
            }
        return v

    @field_validator('options')
    @classmethod
    def validate_option_keys(cls, v: Dict[str, str]) -> Dict[str, str]:
        """
        보기 키는 비어 있으면 안 된다.
        보기가 2개 미만이어도 화면은 그려야 하므로 경고만 남긴다.
        """
        if any(not key.strip() for key in v):
            raise ValueError("보기 키(option key)는 빈 문자열일 수 없습니다.")
        if len(v) < 2:
            logger.warning(f"보기가 2개 미만인 문제가 있습니다: {list(v)}")
        return v

    @model_validator(mode='after')
    def validate_answer_in_options(self) -> 'Question':
        """
        정답 키가 있으면 반드시 보기 키 중 하나여야 한다.
        빈 문자열("")은 허용 (정답 처리 불가 문제).
        """
        if self.correct_answer and self.correct_answer not in self.options:
            raise ValueError(
                f"정답('{self.correct_answer}')이 보기 키({list(self.options)})에 존재하지 않습니다."
            )
        return self

    def has_option(self, key: str) -> bool:
        return key in self.options


class Catalog(BaseModel):
    """세션 동안 고정되는 문제 목록. 순서 = 출제 순서."""

    questions: Tuple[Question, ...] = Field(..., min_length=1)

    model_config = {"frozen": True}

    @field_validator('questions')
    @classmethod
    def validate_unique_ids(cls, v: Tuple[Question, ...]) -> Tuple[Question, ...]:
        seen = set()
        for q in v:
            if q.id in seen:
                raise ValueError(f"문제 id가 중복됩니다: {q.id!r}")
            seen.add(q.id)
        return v

    def __len__(self) -> int:
        return len(self.questions)

    def __getitem__(self, index: int) -> Question:
        return self.questions[index]

    @property
    def question_ids(self) -> Tuple[QuestionId, ...]:
        return tuple(q.id for q in self.questions)

    def get(self, question_id: QuestionId) -> Optional[Question]:
        for q in self.questions:
            if q.id == question_id:
                return q
        return None
