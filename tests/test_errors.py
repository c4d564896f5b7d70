import pytest

from ccu_tools.ccu import errors, v2, v3


@pytest.mark.parametrize(
    "title,detail,expected",
    [
        ("", "", "unknown"),
        ("", "Y", "unknown"),
        ("X", "", "X"),
        ("X", "Y", "X: Y"),
    ],
)
def test_format_error(title, detail, expected):
    assert errors.format_error(title, detail) == expected


@pytest.mark.parametrize(
    "status_code,success",
    [(0, False), (199, False), (200, True), (201, True), (299, True), (300, False), (404, False)],
)
@pytest.mark.parametrize("response_type", [v2.Response, v2.QueueLengthResponse, v3.PurgeResponse])
def test_assert_success(response_type, status_code, success):
    response = response_type(httpStatus=status_code, title="Title", detail="Detail")

    if success:
        errors.assert_success(response)
    else:
        with pytest.raises(errors.ApiError) as exc_info:
            errors.assert_success(response)
        assert exc_info.value.response is response
        assert exc_info.value.status_code == status_code


def test_api_error_fields():
    response = v2.PurgeStatusResponse.model_validate(
        {
            "httpStatus": 404,
            "title": "Not Found",
            "detail": "The purge ID was not found",
            "supportId": "17PY1234",
            "describedBy": "https://api.ccu.akamai.com/ccu/v2/errors/not-found",
        }
    )
    err = errors.ApiError(response)

    assert str(err) == "Not Found: The purge ID was not found"
    assert str(err) == response.error()
    assert err.support_id == "17PY1234"
    assert err.title == "Not Found"
    assert err.detail == "The purge ID was not found"
    assert err.described_by.endswith("not-found")
    assert err.phase == "api"
    assert isinstance(err, errors.CcuError)


def test_decode_error_keeps_response():
    assert errors.DecodeError("bad").response is None
    assert errors.DecodeError("bad", response="raw").response == "raw"
