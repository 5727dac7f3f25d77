import io
import unittest

from cubebot_core import cli
from robot import FACES, CubeState, apply_moves

QUERY = {
    'U': 'yyoyygbwo',
    'L': 'ggwooboob',
    'F': 'rrwybwyoo',
    'R': 'brgbrgyrg',
    'B': 'wrrwgywoy',
    'D': 'rbbgwbgwr',
}


class StubSolver:
    def __init__(self, moves):
        self.moves = list(moves)
        self.seen = []

    def solve(self, scramble):
        self.seen.append(scramble)
        return list(self.moves)


def _face_args(faces):
    argv = []
    for k, v in faces.items():
        argv += ['--face', f'{k}={v}']
    return argv


def _scrambled_faces(moves):
    s = CubeState.solved()
    apply_moves(s, moves)
    home = s.realigned()
    return {f: home.grid(f).codes() for f in FACES}


class TestCli(unittest.TestCase):
    def _run(self, argv, solver=None, stdin=''):
        out = io.StringIO()
        code = cli.main(argv, solver=solver, stdin=io.StringIO(stdin), stdout=out)
        return code, out.getvalue()

    def test_given_face_args_when_running_then_solution_and_actuation_printed(self):
        solver = StubSolver(["R", "U2", "F'"])
        code, out = self._run(_face_args(QUERY), solver=solver)
        self.assertEqual(code, 0)
        self.assertIn("SOLUTION: step=3: R U2 F'", out)
        self.assertIn("ACTUATION: [turn' flip D flip D2 turn' flip D']", out)
        self.assertTrue(out.rstrip().endswith('DONE'))
        self.assertEqual(len(solver.seen), 1)

    def test_given_real_solution_when_simulating_then_cube_reported_solved(self):
        faces = _scrambled_faces(["R", "U2", "F'"])
        code, out = self._run(_face_args(faces) + ['--simulate'], solver=StubSolver(["F", "U2", "R'"]))
        self.assertEqual(code, 0)
        self.assertIn('simulated 8 actuations: cube solved', out)

    def test_given_bad_face_when_running_then_exit_2(self):
        faces = dict(QUERY, R='brgbrgyr')
        code, out = self._run(_face_args(faces), solver=StubSolver([]))
        self.assertEqual(code, 2)
        self.assertIn('face R: 8 characters, 1 short', out)

    def test_given_face_arg_without_equals_when_running_then_exit_2(self):
        code, out = self._run(['--face', 'Uyyoyygbwo'], solver=StubSolver([]))
        self.assertEqual(code, 2)

    def test_given_malformed_solver_token_when_running_then_exit_255(self):
        code, out = self._run(_face_args(QUERY), solver=StubSolver(["R", "Z"]))
        self.assertEqual(code, 255)
        self.assertIn("move #1 'Z'", out)

    def test_given_init_moves_when_running_then_each_move_shown_without_solving(self):
        solver = StubSolver([])
        code, out = self._run(_face_args(QUERY) + ['--init-moves', 'R,U'], solver=solver)
        self.assertEqual(code, 0)
        self.assertIn('move=R (->R):', out)
        self.assertIn('move=U (->B):', out)
        self.assertIn("[turn' flip D]", out)
        self.assertIn('[flip D]', out)
        self.assertEqual(solver.seen, [])

    def test_given_malformed_init_move_when_running_then_exit_255(self):
        code, out = self._run(_face_args(QUERY) + ['--init-moves', 'R,U,Q'], solver=StubSolver([]))
        self.assertEqual(code, 255)
        self.assertIn("error: move #2 'Q'", out)

    def test_given_typed_faces_when_prompting_then_remaining_count_and_overflow_reported(self):
        lines = [
            'y y o y',
            'ygbwo',
            'green green white orange orange blue orange orange blue extra',
            'rrwybwyoo',
            'b r g b r g y r g',
            'wrrwgywoy',
            'rbbgwbgwr',
        ]
        code, out = self._run([], solver=StubSolver(["D"]), stdin='\n'.join(lines) + '\n')
        self.assertEqual(code, 0)
        self.assertIn('5 remain> ', out)
        self.assertIn('WARNING: read 9 pieces already', out)
        self.assertIn('SOLUTION: step=1: D', out)

    def test_given_input_ends_early_when_prompting_then_exit_2(self):
        code, out = self._run([], solver=StubSolver([]), stdin='yyoyygbwo\n')
        self.assertEqual(code, 2)
        self.assertIn('input ended', out)


if __name__ == '__main__':
    unittest.main(verbosity=2)
