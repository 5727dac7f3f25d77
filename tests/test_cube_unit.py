import random
import unittest

from robot import (
    FACES,
    CalibrationMap,
    Color,
    CubeState,
    FaceletGrid,
    ValidationError,
    decode_scramble,
)

# A scrambled but valid cube (facelet string in solver order).
SCRAMBLE = "DRLUUBFBRBLURRLRUBLRDDFDLFUFUFFDBRDUBRUFLLFDDBFLUBLRBD"


def _numbered_grid():
    # Nine distinct-looking stickers so rotations are observable.
    colors = [Color.WHITE, Color.RED, Color.GREEN, Color.BLUE, Color.YELLOW,
              Color.ORANGE, Color.RED, Color.GREEN, Color.BLUE]
    return FaceletGrid(colors)


class TestFaceletGrid(unittest.TestCase):
    def test_given_grid_when_rotating_clockwise_then_left_column_becomes_top_row(self):
        g = _numbered_grid()
        old = list(g.facelets)
        g.rotate_clockwise()
        self.assertEqual(g.row(0), (old[6], old[3], old[0]))
        self.assertEqual(g.center, old[4])

    def test_given_grid_when_rotating_cw_then_ccw_then_identity(self):
        g = _numbered_grid()
        before = list(g.facelets)
        g.rotate_clockwise().rotate_counterclockwise()
        self.assertEqual(g.facelets, before)
        g.rotate_counterclockwise().rotate_clockwise()
        self.assertEqual(g.facelets, before)

    def test_given_grid_when_rotating_clockwise_four_times_then_identity(self):
        g = _numbered_grid()
        before = list(g.facelets)
        for _ in range(4):
            g.rotate_clockwise()
        self.assertEqual(g.facelets, before)

    def test_given_grid_when_inverting_twice_then_identity_and_once_equals_two_quarters(self):
        g = _numbered_grid()
        before = list(g.facelets)
        g.invert()
        h = FaceletGrid(before).rotate_clockwise().rotate_clockwise()
        self.assertEqual(g.facelets, h.facelets)
        g.invert()
        self.assertEqual(g.facelets, before)

    def test_given_wrong_length_when_building_grid_then_raises(self):
        with self.assertRaises(ValueError):
            FaceletGrid([Color.WHITE] * 8)


class TestCubeState(unittest.TestCase):
    def test_given_any_state_when_flipping_four_times_then_everything_restored(self):
        for start in (CubeState.solved(), decode_scramble(SCRAMBLE)):
            s = start.copy()
            for _ in range(4):
                s.flip()
            self.assertEqual(s, start)

    def test_given_any_state_when_turning_four_times_then_everything_restored(self):
        start = decode_scramble(SCRAMBLE)
        s = start.copy()
        for _ in range(4):
            s.turn(1)
        self.assertEqual(s, start)
        s.turn(2).turn(2)
        self.assertEqual(s, start)
        s.turn(3).turn(1)
        self.assertEqual(s, start)

    def test_given_turn_zero_then_noop(self):
        start = decode_scramble(SCRAMBLE)
        s = start.copy()
        s.turn(0)
        self.assertEqual(s, start)
        self.assertTrue(s.calibration.is_identity())

    def test_given_bad_turn_count_then_raises(self):
        with self.assertRaises(ValueError):
            CubeState.solved().turn(4)

    def test_given_solved_when_flipping_then_grids_and_calibration_follow(self):
        s = CubeState.solved()
        s.flip()
        self.assertEqual(s.grid('U').center, Color.BLUE)    # front came up
        self.assertEqual(s.grid('B').center, Color.WHITE)   # up went back
        self.assertEqual(s.grid('D').center, Color.RED)     # back went down
        self.assertEqual(s.grid('F').center, Color.YELLOW)  # down came front
        self.assertEqual(s.calibration.as_dict(), {'U': 'B', 'L': 'L', 'F': 'U', 'R': 'R', 'B': 'D', 'D': 'F'})

    def test_given_solved_when_turning_then_front_goes_left(self):
        s = CubeState.solved()
        s.turn(1)
        self.assertEqual(s.grid('L').center, Color.BLUE)
        self.assertEqual(s.grid('F').center, Color.ORANGE)
        self.assertEqual(s.grid('R').center, Color.RED)
        self.assertEqual(s.grid('B').center, Color.GREEN)
        self.assertEqual(s.calibration.as_dict(), {'U': 'U', 'L': 'B', 'F': 'L', 'R': 'F', 'B': 'R', 'D': 'D'})

    def test_given_solved_when_spinning_down_then_bottom_rows_cycle_and_calibration_kept(self):
        s = CubeState.solved()
        s.spin_down()
        self.assertTrue(s.calibration.is_identity())
        self.assertEqual(s.grid('R').row(2), (Color.BLUE,) * 3)
        self.assertEqual(s.grid('B').row(2), (Color.ORANGE,) * 3)
        self.assertEqual(s.grid('L').row(2), (Color.RED,) * 3)
        self.assertEqual(s.grid('F').row(2), (Color.GREEN,) * 3)
        self.assertEqual(s.grid('F').row(0), (Color.BLUE,) * 3)
        self.assertTrue(s.grid('D').is_uniform())

    def test_given_any_state_when_spinning_down_four_times_then_restored(self):
        start = decode_scramble(SCRAMBLE)
        s = start.copy()
        for _ in range(4):
            s.spin_down()
        self.assertEqual(s, start)

    def test_given_random_reorientations_then_calibration_stays_bijection(self):
        rng = random.Random(7)
        s = decode_scramble(SCRAMBLE)
        for _ in range(200):
            if rng.random() < 0.5:
                s.flip()
            else:
                s.turn(rng.choice([1, 2, 3]))
            self.assertTrue(s.calibration.is_bijection())
            self.assertEqual(sorted(s.calibration.as_dict().values()), sorted(FACES))

    def test_given_reoriented_state_when_realigning_then_home_state_returns(self):
        start = decode_scramble(SCRAMBLE)
        s = start.copy()
        s.turn(3).flip().turn(2).flip()
        self.assertFalse(s.calibration.is_identity())
        back = s.realigned()
        self.assertTrue(back.calibration.is_identity())
        self.assertEqual(back, start)

    def test_given_copy_when_mutating_then_source_untouched(self):
        s = CubeState.solved()
        c = s.copy()
        c.spin_down()
        c.flip()
        self.assertTrue(s.is_solved())
        self.assertTrue(s.calibration.is_identity())
        self.assertNotEqual(s, c)

    def test_given_repeated_color_when_constructing_then_validation_error(self):
        faces = {f: [Color.WHITE] * 9 for f in FACES}
        with self.assertRaises(ValidationError):
            CubeState.from_colors(faces)

    def test_given_duplicate_centers_with_right_counts_when_constructing_then_validation_error(self):
        faces = {f: list(g.facelets) for f, g in CubeState.solved().grids.items()}
        # swap a corner of U (white) with the center of F (blue) -> U center stays white, F center becomes white
        faces['F'][4], faces['U'][0] = faces['U'][0], faces['F'][4]
        with self.assertRaises(ValidationError) as ctx:
            CubeState.from_colors(faces)
        self.assertIn('distinct', str(ctx.exception))

    def test_given_missing_face_when_constructing_then_validation_error(self):
        grids = {f: FaceletGrid.solid(Color.WHITE) for f in FACES if f != 'D'}
        with self.assertRaises(ValidationError):
            CubeState(grids)

    def test_given_solved_when_pretty_then_net_has_nine_rows(self):
        txt = CubeState.solved().pretty()
        lines = txt.split('\n')
        self.assertEqual(len(lines), 9)
        self.assertEqual(lines[0].strip(), 'w w w')
        self.assertEqual(lines[3], 'g g g  b b b  o o o  r r r')
        self.assertEqual(lines[8].strip(), 'y y y')


class TestCalibrationMap(unittest.TestCase):
    def test_given_identity_when_inverse_then_identity(self):
        cal = CalibrationMap()
        self.assertTrue(cal.is_identity())
        self.assertEqual(cal.inverse(), {f: f for f in FACES})

    def test_given_flip_when_looking_up_both_ways_then_consistent(self):
        cal = CalibrationMap()
        cal.flip()
        for v in FACES:
            self.assertEqual(cal.virtual(cal.physical(v)), v)
        self.assertEqual(str(cal), '{ U->B L->L F->U R->R B->D D->F }')

    def test_given_non_bijection_then_raises(self):
        with self.assertRaises(ValueError):
            CalibrationMap({'U': 'U', 'L': 'U', 'F': 'F', 'R': 'R', 'B': 'B', 'D': 'D'})


if __name__ == '__main__':
    unittest.main(verbosity=2)
