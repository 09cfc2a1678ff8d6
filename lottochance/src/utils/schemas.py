"""
레코드 직렬화 스키마

UI 계층과 캐시가 사용하는 JSON 키(camelCase)로 레코드를 덤프하고,
캐시에서 읽은 JSON을 검증된 불변 레코드로 복원합니다.
"""

from marshmallow import Schema, ValidationError, fields, post_dump, post_load, validate

from .exceptions import InvalidDrawError
from .records import (
    CHANCE_CARD_RANGE,
    LOTTO_NUMBER_RANGE,
    LOTTO_STRONG_RANGE,
    ChanceDraw,
    ChancePrediction,
    FrequencyTable,
    LottoDraw,
    LottoPrediction,
    NumberFrequency,
    ParseDiagnostics,
    ParsedData,
    StatisticsData,
)

_CARD = validate.Range(min=CHANCE_CARD_RANGE[0], max=CHANCE_CARD_RANGE[1])
_CONFIDENCE = validate.Range(min=0, max=100)


class LottoDrawSchema(Schema):
    id = fields.Integer(required=True)
    date = fields.String(required=True)
    numbers = fields.List(
        fields.Integer(validate=validate.Range(min=LOTTO_NUMBER_RANGE[0], max=LOTTO_NUMBER_RANGE[1])),
        required=True,
        validate=validate.Length(equal=6)
    )
    strong_number = fields.Integer(
        required=True,
        data_key='strongNumber',
        validate=validate.Range(min=LOTTO_STRONG_RANGE[0], max=LOTTO_STRONG_RANGE[1])
    )

    @post_load
    def make_draw(self, data, **kwargs):
        try:
            return LottoDraw(**data)
        except InvalidDrawError as e:
            raise ValidationError(str(e)) from e


class ChanceDrawSchema(Schema):
    id = fields.Integer(required=True)
    date = fields.String(required=True)
    clubs = fields.Integer(required=True, validate=_CARD)
    diamonds = fields.Integer(required=True, validate=_CARD)
    hearts = fields.Integer(required=True, validate=_CARD)
    spades = fields.Integer(required=True, validate=_CARD)

    @post_load
    def make_draw(self, data, **kwargs):
        return ChanceDraw(**data)


class ParseDiagnosticsSchema(Schema):
    total_rows = fields.Integer(data_key='totalRows', load_default=0)
    invalid_rows = fields.Integer(data_key='invalidRows', load_default=0)
    valid_rows = fields.Integer(data_key='validRows', load_default=0)

    @post_load
    def make_diagnostics(self, data, **kwargs):
        return ParseDiagnostics(**data)


class ParsedLottoDataSchema(Schema):
    """캐시된 로또 파싱 결과"""
    draws = fields.List(fields.Nested(LottoDrawSchema), required=True)
    last_draw_id = fields.Integer(required=True, data_key='lastDrawId')
    diagnostics = fields.Nested(ParseDiagnosticsSchema, load_default=None)

    @post_load
    def make_parsed(self, data, **kwargs):
        if data.get('diagnostics') is None:
            data['diagnostics'] = ParseDiagnostics(valid_rows=len(data['draws']))
        return ParsedData(**data)


class ParsedChanceDataSchema(ParsedLottoDataSchema):
    """캐시된 찬스 파싱 결과"""
    draws = fields.List(fields.Nested(ChanceDrawSchema), required=True)


class NumberFrequencySchema(Schema):
    number = fields.Integer(required=True)
    count = fields.Integer(required=True, validate=validate.Range(min=0))
    percentage = fields.Integer(required=True, validate=validate.Range(min=0, max=100))
    face = fields.String(allow_none=True, load_default=None)

    @post_dump
    def drop_empty_face(self, data, **kwargs):
        # 로또 항목에는 face 키를 두지 않음
        if data.get('face') is None:
            data.pop('face', None)
        return data

    @post_load
    def make_frequency(self, data, **kwargs):
        return NumberFrequency(**data)


class FrequencyTableSchema(Schema):
    regular = fields.List(fields.Nested(NumberFrequencySchema), load_default=list)
    strong = fields.List(fields.Nested(NumberFrequencySchema), load_default=list)

    @post_load
    def make_table(self, data, **kwargs):
        return FrequencyTable(**data)


class StatisticsDataSchema(Schema):
    """월 단위 캐시에 그대로 저장되는 통계 묶음"""
    lotto_numbers = fields.Nested(FrequencyTableSchema, data_key='lottoNumbers', required=True)
    chance_numbers = fields.Nested(FrequencyTableSchema, data_key='chanceNumbers', required=True)

    @post_load
    def make_statistics(self, data, **kwargs):
        return StatisticsData(**data)


class LottoPredictionSchema(Schema):
    numbers = fields.List(fields.Integer(), required=True, validate=validate.Length(equal=6))
    strong_number = fields.Integer(required=True, data_key='strongNumber')
    confidence = fields.Float(required=True, validate=_CONFIDENCE)
    patterns = fields.List(fields.String(), load_default=list)
    hot_numbers = fields.List(fields.Integer(), data_key='hotNumbers', load_default=list)
    cold_numbers = fields.List(fields.Integer(), data_key='coldNumbers', load_default=list)
    seasonal_patterns = fields.List(fields.String(), data_key='seasonalPatterns', load_default=list)

    @post_load
    def make_prediction(self, data, **kwargs):
        return LottoPrediction(**data)


class ChancePredictionSchema(Schema):
    clubs = fields.Integer(required=True, validate=_CARD)
    diamonds = fields.Integer(required=True, validate=_CARD)
    hearts = fields.Integer(required=True, validate=_CARD)
    spades = fields.Integer(required=True, validate=_CARD)
    confidence = fields.Float(required=True, validate=_CONFIDENCE)
    patterns = fields.List(fields.String(), load_default=list)
    hot_cards = fields.List(fields.Integer(), data_key='hotCards', load_default=list)
    cold_cards = fields.List(fields.Integer(), data_key='coldCards', load_default=list)
    seasonal_patterns = fields.List(fields.String(), data_key='seasonalPatterns', load_default=list)

    @post_load
    def make_prediction(self, data, **kwargs):
        return ChancePrediction(**data)


# 레코드 타입별 스키마
SCHEMA_BY_RECORD = {
    LottoDraw: LottoDrawSchema,
    ChanceDraw: ChanceDrawSchema,
    NumberFrequency: NumberFrequencySchema,
    FrequencyTable: FrequencyTableSchema,
    StatisticsData: StatisticsDataSchema,
    LottoPrediction: LottoPredictionSchema,
    ChancePrediction: ChancePredictionSchema,
}


def dump_record(record) -> dict:
    """
    레코드를 JSON 호환 딕셔너리로 변환

    ParsedData는 추첨 종류에 따라 스키마를 고릅니다.
    """
    if isinstance(record, ParsedData):
        if record.draws and isinstance(record.draws[0], ChanceDraw):
            return ParsedChanceDataSchema().dump(record)
        return ParsedLottoDataSchema().dump(record)

    schema_cls = SCHEMA_BY_RECORD.get(type(record))
    if schema_cls is None:
        raise TypeError(f"직렬화할 수 없는 타입입니다: {type(record).__name__}")
    return schema_cls().dump(record)
