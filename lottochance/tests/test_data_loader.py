"""
CSV 로더 테스트 모듈

이 모듈은 로또/찬스 결과 CSV 파서의 기능을 테스트합니다.
"""

import unittest
from pathlib import Path
import sys

# 프로젝트 루트 디렉토리를 Python 경로에 추가
project_root = str(Path(__file__).parent.parent.parent)
if project_root not in sys.path:
    sys.path.append(project_root)

from marshmallow import ValidationError

from lottochance.src.utils.config import Config
from lottochance.src.utils.data_loader import (
    DataManager,
    parse_card_value,
    parse_chance_csv,
    parse_lotto_csv,
)
from lottochance.src.utils.exceptions import InvalidDrawError, NoValidDrawsError
from lottochance.src.utils.records import ChanceDraw, LottoDraw
from lottochance.src.utils.schemas import dump_record

LOTTO_HEADER = "draw,date,n1,n2,n3,n4,n5,n6,strong"
CHANCE_HEADER = "date,draw,clubs,diamonds,hearts,spades"


def make_csv(header, rows):
    return "\n".join([header] + list(rows))


class TestLottoParser(unittest.TestCase):
    """로또 파서 테스트"""

    def test_duplicate_rows_and_malformed_row(self):
        """중복 번호 회차 2개와 번호가 5개뿐인 행"""
        csv_content = make_csv(LOTTO_HEADER, [
            "1,01/01/2024,1,2,3,4,5,6,7",
            "2,04/01/2024,1,2,3,4,5,6,7",
            "3,08/01/2024,1,2,3,4,5,7",
        ])

        parsed = parse_lotto_csv(csv_content)

        self.assertEqual(len(parsed.draws), 2)
        self.assertEqual(parsed.last_draw_id, 2)
        self.assertEqual(parsed.draws[0].numbers, (1, 2, 3, 4, 5, 6))
        self.assertEqual(parsed.draws[1].strong_number, 7)
        self.assertEqual(parsed.diagnostics.total_rows, 3)
        self.assertEqual(parsed.diagnostics.invalid_rows, 1)
        self.assertEqual(parsed.diagnostics.valid_rows, 2)

    def test_parsing_is_idempotent(self):
        """같은 입력은 같은 결과"""
        csv_content = make_csv(LOTTO_HEADER, [
            "10,01/01/2024,3,9,14,22,30,37,2",
            "11,04/01/2024,1,8,15,20,31,36,5",
        ])

        first = parse_lotto_csv(csv_content)
        second = parse_lotto_csv(csv_content)

        self.assertEqual(first.draws, second.draws)
        self.assertEqual(first.last_draw_id, second.last_draw_id)

    def test_rejects_invalid_rows(self):
        """범위 밖 번호, 잘못된 강번호, 정수가 아닌 값, 중복 번호는 건너뜀"""
        csv_content = make_csv(LOTTO_HEADER, [
            "abc,01/01/2024,1,2,3,4,5,6,1",
            "2,01/01/2024,0,2,3,4,5,6,1",
            "3,01/01/2024,1,2,3,4,5,38,1",
            "4,01/01/2024,1,2,3,4,5,6,8",
            "5,01/01/2024,1,2,3,4,5,x,1",
            "6,01/01/2024,1,1,3,4,5,6,1",
            "7,01/01/2024,1,2,3,4,5,6,1",
        ])

        parsed = parse_lotto_csv(csv_content)

        self.assertEqual([draw.id for draw in parsed.draws], [7])
        self.assertEqual(parsed.diagnostics.invalid_rows, 6)

    def test_rejects_non_ascii_integer_forms(self):
        """'_' 구분자나 비ASCII 숫자는 정수로 인정하지 않음"""
        csv_content = make_csv(LOTTO_HEADER, [
            "1_0,01/01/2024,10,2,3,4,5,6,1",
            "11,01/01/2024,1_0,2,3,4,5,6,1",
            "12,01/01/2024,١,2,3,4,5,6,1",
            "13,01/01/2024,+1,2,3,4,5,6,1",
        ])

        parsed = parse_lotto_csv(csv_content)

        self.assertEqual([draw.id for draw in parsed.draws], [13])
        self.assertEqual(parsed.draws[0].numbers, (1, 2, 3, 4, 5, 6))
        self.assertEqual(parsed.diagnostics.invalid_rows, 3)
        self.assertIsNone(parse_card_value("1_0"))

    def test_keeps_file_order_and_max_id(self):
        """회차 번호로 정렬하지 않고 파일 순서를 유지"""
        csv_content = make_csv(LOTTO_HEADER, [
            "30,01/01/2024,1,2,3,4,5,6,1",
            "12,01/01/2024,7,8,9,10,11,12,2",
            "25,01/01/2024,13,14,15,16,17,18,3",
        ])

        parsed = parse_lotto_csv(csv_content)

        self.assertEqual([draw.id for draw in parsed.draws], [30, 12, 25])
        self.assertEqual(parsed.last_draw_id, 30)

    def test_skip_rows(self):
        """과거 형식 행 건너뛰기"""
        csv_content = make_csv(LOTTO_HEADER, [
            "1,01/01/1990,40,41,42,43,44,45,9",
            "2,01/01/1990,40,41,42,43,44,45,9",
            "3,01/01/2024,1,2,3,4,5,6,1",
        ])

        parsed = parse_lotto_csv(csv_content, skip_rows=2)

        self.assertEqual(len(parsed.draws), 1)
        self.assertEqual(parsed.diagnostics.total_rows, 1)

    def test_extra_columns_and_blank_lines(self):
        """추가 컬럼과 빈 줄, CRLF 줄바꿈 허용"""
        csv_content = LOTTO_HEADER + "\r\n" + "5,01/01/2024,1,2,3,4,5,6,1,extra,more\r\n\r\n"

        parsed = parse_lotto_csv(csv_content)

        self.assertEqual(len(parsed.draws), 1)
        self.assertEqual(parsed.draws[0].date, "01/01/2024")

    def test_header_only_raises(self):
        """헤더만 있으면 오류"""
        with self.assertRaises(NoValidDrawsError) as context:
            parse_lotto_csv(LOTTO_HEADER + "\n")
        self.assertIn("No valid draws", str(context.exception))

    def test_all_draws_satisfy_invariants(self):
        """파싱된 모든 회차는 1-37의 서로 다른 6개 번호와 1-7 강번호"""
        rows = [
            f"{i},01/01/2024,{i % 30 + 1},{i % 30 + 2},{i % 30 + 3},{i % 30 + 4},{i % 30 + 5},{i % 30 + 8},{i % 7 + 1}"
            for i in range(1, 60)
        ]
        parsed = parse_lotto_csv(make_csv(LOTTO_HEADER, rows))

        for draw in parsed.draws:
            self.assertEqual(len(set(draw.numbers)), 6)
            self.assertTrue(all(1 <= n <= 37 for n in draw.numbers))
            self.assertTrue(1 <= draw.strong_number <= 7)


class TestChanceParser(unittest.TestCase):
    """찬스 파서 테스트"""

    def test_parse_card_value(self):
        """카드 값 변환"""
        self.assertEqual(parse_card_value("7"), 7)
        self.assertEqual(parse_card_value("14"), 14)
        self.assertEqual(parse_card_value("J"), 11)
        self.assertEqual(parse_card_value("q"), 12)
        self.assertEqual(parse_card_value("K"), 13)
        self.assertEqual(parse_card_value("A"), 14)
        self.assertIsNone(parse_card_value("6"))
        self.assertIsNone(parse_card_value("15"))
        self.assertIsNone(parse_card_value("Z"))
        self.assertIsNone(parse_card_value(""))

    def test_parse_with_face_cards(self):
        """그림 카드는 11-14로 변환"""
        csv_content = make_csv(CHANCE_HEADER, [
            "05/03/2024,1001,A,K,7,10",
            "06/03/2024,1002,J,Q,8,9",
        ])

        parsed = parse_chance_csv(csv_content)

        self.assertEqual(len(parsed.draws), 2)
        first = parsed.draws[0]
        self.assertEqual((first.clubs, first.diamonds, first.hearts, first.spades), (14, 13, 7, 10))
        self.assertEqual(first.date, "05/03/2024")
        self.assertEqual(parsed.last_draw_id, 1002)

    def test_diagnostics_count_rejections(self):
        """무효 행은 진단 정보에 집계"""
        csv_content = make_csv(CHANCE_HEADER, [
            "05/03/2024,1001,7,8,9,10",
            "05/03/2024,1002,7,8,9",
            "05/03/2024,x,7,8,9,10",
            "05/03/2024,1004,7,8,9,2",
            "",
            "05/03/2024,1005,A,A,A,A",
        ])

        parsed = parse_chance_csv(csv_content)

        self.assertEqual(parsed.diagnostics.total_rows, 5)
        self.assertEqual(parsed.diagnostics.invalid_rows, 3)
        self.assertEqual(parsed.diagnostics.valid_rows, 2)
        self.assertAlmostEqual(parsed.diagnostics.success_rate, 40.0)
        for draw in parsed.draws:
            self.assertTrue(all(7 <= card <= 14 for card in draw.cards))

    def test_no_valid_rows_raises(self):
        """유효한 행이 없으면 오류"""
        with self.assertRaises(NoValidDrawsError):
            parse_chance_csv(make_csv(CHANCE_HEADER, ["05/03/2024,1001,1,2,3,4"]))


class TestRecords(unittest.TestCase):
    """레코드 검증 테스트"""

    def test_lotto_draw_validation(self):
        with self.assertRaises(InvalidDrawError):
            LottoDraw(id=1, date="", numbers=(1, 2, 3, 4, 5), strong_number=1)
        with self.assertRaises(InvalidDrawError):
            LottoDraw(id=1, date="", numbers=(1, 2, 3, 4, 5, 6), strong_number=0)

    def test_chance_draw_validation(self):
        with self.assertRaises(InvalidDrawError):
            ChanceDraw(id=1, date="", clubs=6, diamonds=7, hearts=8, spades=9)


class TestDataManager(unittest.TestCase):
    """데이터 관리자 테스트"""

    def test_configured_skip_rows(self):
        """설정의 skip 값 적용"""
        manager = DataManager(Config({'parser': {'lotto_skip_rows': 1}}))
        csv_content = make_csv(LOTTO_HEADER, [
            "1,01/01/2024,1,2,3,4,5,6,1",
            "2,01/01/2024,7,8,9,10,11,12,2",
        ])

        parsed = manager.load_lotto(csv_content)

        self.assertEqual([draw.id for draw in parsed.draws], [2])

    def test_load_cached(self):
        """캐시 JSON 복원"""
        manager = DataManager()
        parsed = manager.load_chance(make_csv(CHANCE_HEADER, ["05/03/2024,1001,A,K,7,10"]))

        restored = manager.load_cached(dump_record(parsed), 'chance')

        self.assertEqual(restored.draws, parsed.draws)
        self.assertEqual(restored.last_draw_id, 1001)
        self.assertEqual(restored.diagnostics, parsed.diagnostics)

    def test_load_cached_rejects_corrupt_payload(self):
        """손상된 캐시는 검증 오류"""
        payload = {
            'draws': [{'id': 1, 'date': '', 'numbers': [1, 2, 3, 4, 5, 99], 'strongNumber': 1}],
            'lastDrawId': 1,
        }
        with self.assertRaises(ValidationError):
            DataManager().load_cached(payload, 'lotto')

    def test_load_cached_unknown_game(self):
        with self.assertRaises(ValueError):
            DataManager().load_cached({}, 'bingo')


if __name__ == '__main__':
    unittest.main()
