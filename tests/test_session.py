import pytest

from pose_evaluation import FrameScore, Grade, SessionAccumulator, score_to_grade, session_score


def _frames(*scores):
    return [FrameScore(score=s, timestamp=float(i), angles={}) for i, s in enumerate(scores)]


def test_session_score_empty_is_zero():
    assert session_score([], 1.0) == 0.0
    assert session_score([], 0.3) == 0.0


def test_session_score_examples():
    assert session_score(_frames(1.0), 1.0) == pytest.approx(100.0)
    assert session_score(_frames(0.5), 0.8) == pytest.approx(40.0)
    assert session_score(_frames(1.0, 0.5, 0.0), 1.0) == pytest.approx(50.0)


def test_session_score_default_penalty():
    assert session_score(_frames(1.0)) == pytest.approx(90.0)


@pytest.mark.parametrize('score, grade', [
    (100, Grade.ADVANCED),
    (80, Grade.ADVANCED),
    (79, Grade.INTERMEDIATE),
    (79.99, Grade.INTERMEDIATE),
    (60, Grade.INTERMEDIATE),
    (59, Grade.BEGINNER),
    (0, Grade.BEGINNER),
])
def test_grade_boundaries(score, grade):
    assert score_to_grade(score) == grade


def test_grade_values():
    assert [g.value for g in Grade] == ['Advanced', 'Intermediate', 'Beginner']


class TestSessionAccumulator:

    def test_add_frame_records_scores_and_history(self, elbow_pose):
        acc = SessionAccumulator(elbow_pose, start_time=0.0)
        result = acc.add_frame({'left_elbow_angle': 90.0, 'right_elbow_angle': 105.0}, timestamp=0.5)

        assert result.score == pytest.approx(0.75)
        assert acc.live_similarity == 75
        assert len(acc.frame_scores) == 1
        assert acc.frame_scores[0].timestamp == 0.5
        assert acc.angle_history == {
            'left_elbow_angle': (90.0,),
            'right_elbow_angle': (105.0,),
        }

    def test_first_frame_sets_start_time(self, elbow_pose):
        acc = SessionAccumulator(elbow_pose)
        assert acc.hold_progress(now=100.0) == 0.0
        acc.add_frame({'left_elbow_angle': 90.0}, timestamp=10.0)
        assert acc.start_time == 10.0

    def test_hold_progress(self, elbow_pose):
        acc = SessionAccumulator(elbow_pose, start_time=0.0)
        assert acc.hold_progress(now=15.0) == pytest.approx(50.0)
        assert not acc.is_complete(now=29.9)
        assert acc.hold_progress(now=45.0) == 100.0
        assert acc.is_complete(now=30.0)

    def test_finalize_steady_perfect_hold(self, elbow_pose):
        acc = SessionAccumulator(elbow_pose, start_time=0.0)
        for t in range(3):
            acc.add_frame({'left_elbow_angle': 90.0, 'right_elbow_angle': 90.0}, timestamp=float(t))

        result = acc.finalize()
        assert result.accuracy == 100
        assert result.stability == 100
        assert result.symmetry == 100
        assert result.score == pytest.approx(100.0)
        assert result.grade == Grade.ADVANCED
        assert result.feedback == ()
        assert result.frame_count == 3

    def test_finalize_unsteady_hold(self, elbow_pose):
        acc = SessionAccumulator(elbow_pose, start_time=0.0)
        acc.add_frame({'left_elbow_angle': 90.0, 'right_elbow_angle': 90.0}, timestamp=0.0)
        acc.add_frame({'left_elbow_angle': 120.0, 'right_elbow_angle': 90.0}, timestamp=1.0)

        result = acc.finalize()
        # left elbow std 15 -> 0, right elbow steady -> 1
        assert result.stability == 50
        # last frame: left scores 0, right scores 1
        assert result.accuracy == 50
        assert result.symmetry == 83
        assert result.score == pytest.approx(0.75 * 0.5 * 100)
        assert result.grade == Grade.BEGINNER
        assert result.feedback == ('Close left elbow by ≈30°',)

    def test_finalize_without_frames(self, elbow_pose):
        result = SessionAccumulator(elbow_pose).finalize()
        assert (result.accuracy, result.stability, result.symmetry) == (0, 0, 0)
        assert result.score == 0.0
        assert result.grade == Grade.BEGINNER
        assert result.feedback == ()

    def test_reset_discards_everything(self, elbow_pose):
        acc = SessionAccumulator(elbow_pose, start_time=0.0)
        acc.add_frame({'left_elbow_angle': 90.0}, timestamp=1.0)
        acc.reset()

        assert acc.frame_scores == ()
        assert acc.angle_history == {}
        assert acc.live_similarity == 0
        assert acc.start_time is None

    def test_result_to_dict(self, elbow_pose):
        acc = SessionAccumulator(elbow_pose, start_time=0.0)
        acc.add_frame({'left_elbow_angle': 170.0, 'right_elbow_angle': 90.0}, timestamp=0.0)
        result = acc.finalize()
        assert isinstance(result.feedback, tuple)
        data = result.to_dict()

        assert data['grade'] in ('Advanced', 'Intermediate', 'Beginner')
        assert data['feedback'] == ['Close left elbow by ≈80°']
        assert set(data) == {
            'accuracy', 'stability', 'symmetry', 'grade', 'feedback', 'score', 'frame_count'
        }
