"""
cubebot core Python package.

Pure-logic pieces of the cube robot: the cube model, the calibration between
the solver's frame and the physical cube, and the translation of solver moves
into rig actuation.
Modules:
- facelets.py: Color, face labels, facelet input parsing
- grid.py: FaceletGrid and its rotations
- calibration.py: CalibrationMap
- state.py: CubeState (flip, turn, spin_down)
- moves.py: Move, Actuation, the reorientation table and the apply loop
- scramble.py: solver facelet-string encoding/decoding
- solver_cli.py: the external two-phase solver boundary
- actuation.py: sinks and the polled actuator driver
- runner.py: encode -> solve -> translate pipeline
- config.py, errors.py, cli.py
"""
