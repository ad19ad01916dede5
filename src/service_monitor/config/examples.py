"""Built-in example catalog used when no catalog file is available."""

from __future__ import annotations

from typing import Any


def example_catalog() -> list[dict[str, Any]]:
    """Return raw descriptors showing each URL and header resolution form."""
    return [
        {
            "id": "rest-example-1",
            "name": "Example REST API",
            "type": "REST",
            # baseUrl + path, overridable per environment
            "baseUrl": "https://jsonplaceholder.typicode.com",
            "path": "posts/1",
            "baseUrlEnvVar": "API_BASE_URL_EXAMPLE_1",
            "environmentUrls": {
                "DEV": "https://dev-api.example.com/posts/1",
                "QA": "https://qa-api.example.com/posts/1",
                "SIT": "https://sit-api.example.com/posts/1",
                "UAT": "https://uat-api.example.com/posts/1",
                "PROD": "https://api.example.com/posts/1",
            },
            "method": "GET",
            "headers": {
                "Accept": "application/json",
                "Authorization": "Bearer default-token",
            },
            "headerEnvVars": {"Authorization": "API_AUTH_TOKEN"},
            "expectedStatus": 200,
            "expectedContent": {"userId": 1, "id": 1, "title": "", "body": ""},
            "environment": "DEV",
        },
        {
            "id": "rest-example-2",
            "name": "Example REST API with Headers",
            "type": "REST",
            "url": "https://jsonplaceholder.typicode.com/posts",
            "urlEnvVar": "API_URL_EXAMPLE_2",
            "method": "POST",
            "headers": {
                "Content-Type": "application/json",
                "Accept": "application/json",
                "X-API-Key": "default-api-key",
                "NAME-API-Key": "default-name-api-key",
            },
            "headerEnvVars": {
                "X-API-Key": "API_KEY",
                "NAME-API-Key": ["NAME_API_KEY", "API_KEY"],
            },
            "body": {"title": "foo", "body": "bar", "userId": 1},
            "expectedStatus": 201,
        },
        {
            "id": "soap-example-1",
            "name": "Example SOAP Service",
            "type": "SOAP",
            "baseUrl": "http://webservices.oorsprong.org",
            "path": "websamples.countryinfo/CountryInfoService.wso?WSDL",
            "baseUrlEnvVar": "SOAP_BASE_URL_EXAMPLE",
            "environmentUrls": {
                "DEV": "http://dev-webservices.example.org/websamples.countryinfo/CountryInfoService.wso?WSDL",
                "QA": "http://qa-webservices.example.org/websamples.countryinfo/CountryInfoService.wso?WSDL",
                "PROD": "http://webservices.example.org/websamples.countryinfo/CountryInfoService.wso?WSDL",
            },
            "method": "CountryName",
            "args": {"sCountryISOCode": "US"},
            "options": {"namespace": "http://www.oorsprong.org/websamples.countryinfo"},
            "expectedContent": {"CountryNameResult": "United States"},
            "environment": "QA",
        },
        {
            "id": "rest-example-gateway",
            "name": "Example API Gateway",
            "type": "REST",
            "baseUrl": "https://gateway.example.com:8070",
            "path": "v3/rest/status",
            "urlEnvVar": "GATEWAY_STATUS_URL",
            "environmentUrls": {
                "DEV": "https://dev-gateway.example.com:8070/v3/rest/status",
                "QA": "https://qa-gateway.example.com:8070/v3/rest/status",
                "PROD": "https://gateway.example.com:8070/v3/rest/status",
            },
            "method": "GET",
            "headers": {"Accept": "application/json", "NAME-API-Key": "default-gateway-key"},
            "headerEnvVars": {"NAME-API-Key": "NAME_API_KEY"},
            "expectedStatus": 200,
        },
    ]
