from __future__ import annotations

import pytest


@pytest.fixture
def hr_rows():
    return [
        {"EmployeeNumber": 1, "Age": 24, "Attrition": "Yes", "Department": "Sales", "JobRole": "Sales Rep",
         "OverTime": "Yes", "YearsAtCompany": 1, "MonthlyIncome": 2500},
        {"EmployeeNumber": 2, "Age": 31, "Attrition": "No", "Department": "Sales", "JobRole": "Sales Exec",
         "OverTime": "Yes", "YearsAtCompany": 1, "MonthlyIncome": 2800},
        {"EmployeeNumber": 3, "Age": 45, "Attrition": "No", "Department": "R&D", "JobRole": "Scientist",
         "OverTime": "No", "YearsAtCompany": 10, "MonthlyIncome": 9000},
        {"EmployeeNumber": 4, "Age": None, "Attrition": "No", "Department": None, "JobRole": "Scientist",
         "OverTime": "No", "YearsAtCompany": "n/a", "MonthlyIncome": 16000},
    ]


@pytest.fixture
def telecom_rows():
    return [
        {"customerID": "C-1", "Churn": "Yes", "Contract": "Month-to-month", "InternetService": "Fiber optic",
         "tenure": 2, "MonthlyCharges": 95.0, "TechSupport": "No", "OnlineSecurity": "No",
         "PaymentMethod": "Electronic check"},
        {"customerID": "C-2", "Churn": "No", "Contract": "Month-to-month", "InternetService": "Fiber optic",
         "tenure": 5, "MonthlyCharges": 85.0, "TechSupport": "No", "OnlineSecurity": "No",
         "PaymentMethod": "Electronic check"},
        {"customerID": "C-3", "Churn": "No", "Contract": "Two year", "InternetService": "DSL",
         "tenure": 60, "MonthlyCharges": 30.0, "TechSupport": "Yes", "OnlineSecurity": "Yes",
         "PaymentMethod": "Bank transfer (automatic)"},
        {"customerID": "C-4", "Churn": "No", "Contract": "One year", "InternetService": "DSL",
         "tenure": 13, "MonthlyCharges": 50.0, "TechSupport": "Yes", "OnlineSecurity": "No",
         "PaymentMethod": "Mailed check"},
    ]


@pytest.fixture
def retail_rows():
    return [
        {"invoice_no": "I100", "gender": "Female", "age": 28, "category": "Clothing", "quantity": 2,
         "price": 300.0, "payment_method": "Cash", "invoice_date": "2022-10-05", "shopping_mall": "Kanyon"},
        {"invoice_no": "I101", "gender": "Male", "age": 41, "category": "Shoes", "quantity": 1,
         "price": 900.0, "payment_method": "Credit Card", "invoice_date": "2023-02-11", "shopping_mall": "Forum"},
        {"invoice_no": "I102", "gender": "Female", "age": 35, "category": "Clothing", "quantity": 1,
         "price": 100.0, "payment_method": "Cash", "invoice_date": "2022-02-20", "shopping_mall": "Kanyon"},
        {"invoice_no": "I103", "gender": None, "age": "x", "category": "Books", "quantity": 0,
         "price": 15.0, "payment_method": "Cash", "invoice_date": None, "shopping_mall": "Forum"},
    ]
