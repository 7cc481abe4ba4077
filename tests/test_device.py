import pytest

from kalreader.device import Device, DeviceId, DeviceTarget


class _FakeDevice(Device):
    name = "Fake"
    device_id = DeviceId(0x1234, 0x5678)

    def __init__(self, configuration=None, source=None):
        super().__init__(configuration, source)
        self.exported = []
        self.initialised_with = None

    def init(self, device_id):
        self.initialised_with = device_id

    def release(self):
        self.initialised_with = None

    def get_sessions_list(self):
        return {1: {"name": "one"}, 2: {"name": "two"}}

    def export_session(self, session):
        self.exported.append(session)

    def get_sessions_details(self, sessions):
        for session in sessions.values():
            session["detailed"] = True


class _Bike(_FakeDevice):
    target = DeviceTarget.BIKING


def test_device_is_abstract():
    with pytest.raises(TypeError):
        Device()


def test_configuration_copy_drives_verbose_logging(capsys):
    source = object()
    config = {"verbose": "false"}
    device = _FakeDevice(config, source)
    config["verbose"] = "true"
    Device.log_verbose(device, "hello")
    assert capsys.readouterr().out == ""
    assert device.configuration == {"verbose": "false"}
    assert device.source is source


def test_lifecycle_and_sessions():
    device = _FakeDevice()
    assert device.target is DeviceTarget.RUNNING
    assert _Bike().target is DeviceTarget.BIKING
    device.init(DeviceId(0x1234, 0x5678))
    assert device.initialised_with == device.device_id
    sessions = device.get_sessions_list()
    device.get_sessions_details(sessions)
    assert all(session["detailed"] for session in sessions.values())
    device.export_session("session")
    assert device.exported == ["session"]
    device.release()
    assert device.initialised_with is None


def test_log_verbose_prints_when_enabled(capsys):
    Device.log_verbose(_FakeDevice({"verbose": "true"}), "hello")
    assert "hello" in capsys.readouterr().out


@pytest.mark.parametrize("config", [{}, {"verbose": "false"}, {"verbose": "yes"}])
def test_log_verbose_silent_otherwise(capsys, config):
    Device.log_verbose(_FakeDevice(config), "hello")
    assert capsys.readouterr().out == ""


def test_device_id_equality():
    assert DeviceId(1, 2) == DeviceId(1, 2)
    assert DeviceId(1, 2) != DeviceId(2, 1)