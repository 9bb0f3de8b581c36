# rotorsim

Plain-Python physics models for simulated aerial and underwater vehicles
and some of their sensors. Each model takes the current simulation state
(time, velocities, orientations) and returns the forces, torques or sensor
readings that should be applied or published. It depends only on the
standard library.

## Modules

| Module              | Contents                                                              |
|---------------------|-----------------------------------------------------------------------|
| `rotorsim.mathutil` | `Vector3`, `Quaternion`, `FirstOrderFilter`, `constrain`, `degrees_360`, `quaternion_from_small_angle`, frame constants |
| `rotorsim.geomag`   | `get_mag_declination`, `get_mag_inclination`, `get_mag_strength`      |
| `rotorsim.motor`    | `MotorModel`, `MotorParams`, `MotorOutput`, `TurningDirection`, `parse_turning_direction` |
| `rotorsim.liftdrag` | `LiftDragModel`, `LiftDragParams`, `LiftDragResult`                   |
| `rotorsim.uuv`      | `UUVModel`, `UUVParams`, `UUVForces`                                  |
| `rotorsim.wind`     | `WindModel`, `WindParams`, `WindSample`                               |
| `rotorsim.vision`   | `VisionModel`, `VisionParams`, `Odometry`                             |
| `rotorsim.sonar`    | `RangeReading`, `range_reading`, `sonar_fov`, `sonar_topic`, `split_scoped_name` |

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Examples

### Math helpers

```python
from rotorsim.mathutil import FirstOrderFilter, Quaternion, Vector3, constrain, degrees_360

q = Quaternion.from_euler(0.0, 0.0, 1.5707963)
east = q.rotate_vector(Vector3(1.0, 0.0, 0.0))   # about Vector3(0, 1, 0)

constrain(12.0, 0.0, 10.0)   # 10.0
degrees_360(-90.0)           # 270.0

# Rises with time constant 1/80 s, falls with 1/40 s.
flt = FirstOrderFilter(1.0 / 80.0, 1.0 / 40.0, 0.0)
for _ in range(10):
    value = flt.update(100.0, 0.004)
```

`Vector3.corrected()` replaces NaN and infinite components with zero;
`quaternion_from_small_angle` raises `ValueError` unless given exactly
three values.

### Magnetic field

Values are interpolated bilinearly from tables sampled every 10 degrees
between -60 and 60 latitude and -180 and 180 longitude:

```python
from rotorsim.geomag import get_mag_declination, get_mag_inclination, get_mag_strength

lat, lon = 47.4, 8.5
declination = get_mag_declination(lat, lon)   # degrees
inclination = get_mag_inclination(lat, lon)   # degrees
strength = get_mag_strength(lat, lon)         # centi-Tesla
```

Latitudes outside [-90, 90] or longitudes outside [-180, 180] give `0.0`.

### Rotor

```python
from rotorsim.mathutil import Quaternion, Vector3
from rotorsim.motor import MotorModel, MotorParams, parse_turning_direction

motor = MotorModel(MotorParams(motor_number=0, turning_direction=parse_turning_direction("ccw")))
motor.set_command([600.0, 600.0, 600.0, 600.0])   # capped at max_rot_velocity
out = motor.update(
    sim_time=0.004,
    joint_velocity=60.0,
    body_velocity=Vector3(1.0, 0.0, 0.0),
    joint_axis=Vector3(0.0, 0.0, 1.0),
    relative_rotation=Quaternion(),
)
out.thrust, out.air_drag, out.drag_torque, out.rolling_moment, out.joint_velocity
```

`set_command` raises `IndexError` when the command has no entry for the
motor. `set_failure(n)` fails motor `n - 1` (0 means none); a failed motor
is commanded to joint velocity 0. Thrust fades linearly with body speed
and is zero from 25 m/s on.

### Lift and drag

```python
from rotorsim.liftdrag import LiftDragModel, LiftDragParams
from rotorsim.mathutil import Quaternion, Vector3

wing = LiftDragModel(LiftDragParams(area=0.3, cla=4.0))
result = wing.compute(Vector3(-20.0, 0.0, -1.0), Quaternion())
if result is not None:
    result.force, result.torque, result.alpha, result.sweep
```

`compute` returns `None` when the speed at the centre of pressure is at
most 0.01. The moment coefficient is held at zero, so `torque` is zero.

### Underwater vehicle, wind, odometry and sonar

```python
from rotorsim.mathutil import Quaternion, Vector3
from rotorsim.sonar import range_reading, sonar_fov, sonar_topic
from rotorsim.uuv import UUVModel, UUVParams
from rotorsim.vision import VisionModel
from rotorsim.wind import WindModel, WindParams

uuv = UUVModel(UUVParams(motor_force_constant=1e-5, damping_linear=Vector3(5.0, 20.0, 20.0)))
uuv.set_command([100.0, 100.0, 100.0, 100.0])     # ValueError if fewer than four
forces = uuv.update(0.01, Vector3(0.5, 0.0, 0.0), Vector3())
forces.body_force, forces.rotor_forces

wind = WindModel(WindParams(wind_force_mean=1.0, wind_force_max=2.0), seed=1)
sample = wind.sample(now=5.0)
sample.force

vio = VisionModel(seed=1)
odom = vio.update(0.1, Vector3(1.0, 0.0, 0.0), Quaternion(), Vector3(), Vector3())
# None until more than 1 / pub_rate seconds have passed since the last estimate.

fov = sonar_fov(0.1, 5.0)                          # radians
sonar_topic("iris::sonar_model::link")             # "~/iris/link/sonar_model"
reading = range_reading(1.5, 0.2, 5.0, 2.3, 0.1, Quaternion())
```

## What this package does not do

The models only compute values. They do not connect to a simulator, read
model description files, or publish or subscribe to messages; the caller
supplies the state each step and applies or sends the results. There is no
command-line program.