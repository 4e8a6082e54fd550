"""
Company hierarchy and client API views.
"""

import uuid

from asgiref.sync import async_to_sync
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1 import container
from api.v1.common import ErrorSerializer, actor_from
from api.v1.companies.serializers import (
    ClientSerializer,
    CompanySerializer,
    CreateClientRequestSerializer,
    CreateCompanyRequestSerializer,
    UpdateClientStatusRequestSerializer,
    UpdateCompanyRequestSerializer,
)
from companies.application.commands.company_commands import (
    CreateClientCommand,
    CreateCompanyCommand,
    UpdateClientStatusCommand,
    UpdateCompanyCommand,
)
from companies.application.queries.company_queries import (
    GetClientQuery,
    GetCompanyQuery,
    ListClientsQuery,
    ListCompaniesQuery,
    ListDescendantsQuery,
)
from core.domain.value_objects import ClientStatus, CompanyStatus, CompanyType


class CompanyListView(APIView):
    """List visible companies or create one."""

    @extend_schema(
        operation_id="list_companies",
        summary="List Companies",
        tags=["Companies"],
        responses={200: CompanySerializer(many=True)},
    )
    def get(self, request: Request) -> Response:
        query = ListCompaniesQuery(actor=actor_from(request))
        companies = async_to_sync(container.list_companies_handler().handle)(query)
        return Response(CompanySerializer(companies, many=True).data)

    @extend_schema(
        operation_id="create_company",
        summary="Create Company",
        description="Add a company under a parent whose type allows it.",
        tags=["Companies"],
        request=CreateCompanyRequestSerializer,
        responses={201: CompanySerializer, 400: ErrorSerializer, 403: ErrorSerializer, 404: ErrorSerializer},
    )
    def post(self, request: Request) -> Response:
        serializer = CreateCompanyRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        command = CreateCompanyCommand(
            name=data["name"],
            company_type=CompanyType(data["company_type"]),
            parent_id=data.get("parent_id"),
            status=CompanyStatus(data["status"]),
            contact_info=data.get("contact_info", {}),
            actor=actor_from(request),
        )
        company = async_to_sync(container.create_company_handler().handle)(command)
        return Response(CompanySerializer(company).data, status=status.HTTP_201_CREATED)


class CompanyDetailView(APIView):
    """Read or change one company."""

    @extend_schema(
        operation_id="get_company",
        summary="Get Company",
        tags=["Companies"],
        responses={200: CompanySerializer, 404: ErrorSerializer},
    )
    def get(self, request: Request, company_id: uuid.UUID) -> Response:
        query = GetCompanyQuery(company_id=company_id, actor=actor_from(request))
        company = async_to_sync(container.get_company_handler().handle)(query)
        return Response(CompanySerializer(company).data)

    @extend_schema(
        operation_id="update_company",
        summary="Update Company",
        description="Rename, change status or move a company. Moves are checked for cycles.",
        tags=["Companies"],
        request=UpdateCompanyRequestSerializer,
        responses={200: CompanySerializer, 400: ErrorSerializer, 404: ErrorSerializer},
    )
    def patch(self, request: Request, company_id: uuid.UUID) -> Response:
        serializer = UpdateCompanyRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        command = UpdateCompanyCommand(
            company_id=company_id,
            actor=actor_from(request),
            name=data.get("name"),
            status=CompanyStatus(data["status"]) if "status" in data else None,
            contact_info=data.get("contact_info"),
            parent_id=data.get("parent_id"),
            change_parent="parent_id" in data,
        )
        company = async_to_sync(container.update_company_handler().handle)(command)
        return Response(CompanySerializer(company).data)


class CompanyDescendantsView(APIView):
    @extend_schema(
        operation_id="list_company_descendants",
        summary="List Company Descendants",
        description="Every company below the given one, breadth first.",
        tags=["Companies"],
        responses={200: CompanySerializer(many=True), 404: ErrorSerializer},
    )
    def get(self, request: Request, company_id: uuid.UUID) -> Response:
        query = ListDescendantsQuery(company_id=company_id, actor=actor_from(request))
        companies = async_to_sync(container.list_descendants_handler().handle)(query)
        return Response(CompanySerializer(companies, many=True).data)


class ClientListView(APIView):
    """List visible clients or register one."""

    @extend_schema(
        operation_id="list_clients",
        summary="List Clients",
        tags=["Clients"],
        parameters=[
            OpenApiParameter(name="status", type=str, location=OpenApiParameter.QUERY, required=False),
        ],
        responses={200: ClientSerializer(many=True)},
    )
    def get(self, request: Request) -> Response:
        query = ListClientsQuery(actor=actor_from(request), status=request.query_params.get("status"))
        clients = async_to_sync(container.list_clients_handler().handle)(query)
        return Response(ClientSerializer(clients, many=True).data)

    @extend_schema(
        operation_id="create_client",
        summary="Create Client",
        tags=["Clients"],
        request=CreateClientRequestSerializer,
        responses={201: ClientSerializer, 400: ErrorSerializer, 404: ErrorSerializer},
    )
    def post(self, request: Request) -> Response:
        serializer = CreateClientRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        command = CreateClientCommand(
            name=data["name"],
            email=data["email"],
            company_id=data.get("company_id"),
            contact_info=data.get("contact_info", {}),
            is_multi_site=data["is_multi_site"],
            is_multi_user=data["is_multi_user"],
            actor=actor_from(request),
        )
        client = async_to_sync(container.create_client_handler().handle)(command)
        return Response(ClientSerializer(client).data, status=status.HTTP_201_CREATED)


class ClientDetailView(APIView):
    @extend_schema(
        operation_id="get_client",
        summary="Get Client",
        tags=["Clients"],
        responses={200: ClientSerializer, 404: ErrorSerializer},
    )
    def get(self, request: Request, client_id: uuid.UUID) -> Response:
        query = GetClientQuery(client_id=client_id, actor=actor_from(request))
        client = async_to_sync(container.get_client_handler().handle)(query)
        return Response(ClientSerializer(client).data)


class ClientStatusView(APIView):
    @extend_schema(
        operation_id="update_client_status",
        summary="Update Client Status",
        description="Validate, suspend or reset a client to pending.",
        tags=["Clients"],
        request=UpdateClientStatusRequestSerializer,
        responses={200: ClientSerializer, 404: ErrorSerializer},
    )
    def post(self, request: Request, client_id: uuid.UUID) -> Response:
        serializer = UpdateClientStatusRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        command = UpdateClientStatusCommand(
            client_id=client_id,
            status=ClientStatus(serializer.validated_data["status"]),
            actor=actor_from(request),
        )
        client = async_to_sync(container.update_client_status_handler().handle)(command)
        return Response(ClientSerializer(client).data)
